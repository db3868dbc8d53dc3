"""Tests for the command line interface."""

import json
from unittest.mock import Mock, patch

import pytest

from morpheus_provisioner.application.dto import InstanceState
from morpheus_provisioner.cli.formatters import format_output
from morpheus_provisioner.cli.main import execute_command, load_data, main, parse_args
from morpheus_provisioner.domain.core.exceptions import NotFoundError


@pytest.mark.unit
class TestParseArgs:
    """Test argument parsing."""

    def test_create(self):
        args = parse_args(["--format", "yaml", "instances", "create", "--data", "{}"])

        assert args.format == "yaml"
        assert args.resource == "instances"
        assert args.action == "create"

    def test_delete_force_defaults_to_config(self):
        assert parse_args(["instances", "delete", "42"]).force is None
        assert parse_args(["instances", "delete", "42", "--force"]).force is True


@pytest.mark.unit
class TestLoadData:
    """Test --data parsing."""

    def test_inline_json(self):
        assert load_data('{"name": "web01"}') == {"name": "web01"}

    def test_file_reference(self, tmp_path):
        path = tmp_path / "web01.json"
        path.write_text('{"name": "web01"}')

        assert load_data(f"@{path}") == {"name": "web01"}

    def test_invalid_json(self):
        with pytest.raises(ValueError):
            load_data("{oops")

    def test_must_be_object(self):
        with pytest.raises(ValueError):
            load_data("[1, 2]")


@pytest.mark.unit
class TestExecuteCommand:
    """Test routing to the orchestrator."""

    def setup_method(self):
        """Set up test fixtures."""
        self.app = Mock()
        self.orchestrator = self.app.orchestrator
        self.state = InstanceState(id="901", name="web01", status="running")

    def test_create(self, instance_config):
        self.orchestrator.create.return_value = self.state
        args = parse_args(["instances", "create", "--data", json.dumps(instance_config)])

        result = execute_command(args, self.app)

        assert result["id"] == "901"
        assert self.orchestrator.create.call_args[0][0].name == "web01"

    def test_get_by_name_not_found(self):
        self.orchestrator.read.return_value = None
        args = parse_args(["instances", "get", "--name", "web01"])

        assert execute_command(args, self.app) == {"instances": []}
        self.orchestrator.read.assert_called_once_with(instance_id=None, name="web01")

    def test_get_requires_id_or_name(self):
        with pytest.raises(ValueError):
            execute_command(parse_args(["instances", "get"]), self.app)

    def test_delete(self):
        result = execute_command(parse_args(["instances", "delete", "42", "--force"]), self.app)

        self.orchestrator.delete.assert_called_once_with("42", force=True)
        assert result == {"id": "42", "deleted": True}


@pytest.mark.unit
class TestMain:
    """Test exit codes and error output."""

    def test_domain_error_exits_1(self, capsys, instance_config):
        app = Mock()
        app.orchestrator.create.side_effect = NotFoundError("Group", "missing")

        with patch("morpheus_provisioner.bootstrap.create_application", return_value=app):
            with pytest.raises(SystemExit) as exc_info:
                main(["instances", "create", "--data", json.dumps(instance_config)])

        assert exc_info.value.code == 1
        assert "Error: Found 0 Group candidates for 'missing'" in capsys.readouterr().out
        app.close.assert_called_once()

    def test_success_prints_output(self, capsys):
        app = Mock()
        app.orchestrator.read.return_value = InstanceState(id="42", name="web01")

        with patch("morpheus_provisioner.bootstrap.create_application", return_value=app):
            main(["instances", "get", "42"])

        assert json.loads(capsys.readouterr().out)["id"] == "42"

    def test_no_resource(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main([])

        assert exc_info.value.code == 1


@pytest.mark.unit
class TestFormatters:
    """Test output formatting."""

    def test_yaml(self):
        assert format_output({"id": "42", "name": "web01"}, "yaml") == "id: '42'\nname: web01\n"

    def test_table(self):
        output = format_output({"id": "42", "name": "web01", "status": "running"}, "table")

        assert "web01" in output
        assert "running" in output

    def test_empty_table(self):
        assert format_output({"instances": []}, "table") == "No instances found."
