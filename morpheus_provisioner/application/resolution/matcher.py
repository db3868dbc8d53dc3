"""
Name-or-id matching of a user token against catalog candidates.

Matching runs through an ordered list of tiers and stops at the first tier
that matches anything:

1. ``exact``  - case-sensitive equality with id, name, code or external id
2. ``value``  - equality with the numeric ``value`` truncated to an integer
3. ``prefix`` - ``name`` starts with the token, followed by nothing or by a
   character that is not a letter or digit

A field only takes part when the caller lists it in ``match_fields``; the
value tier needs ``MatchField.VALUE`` and the prefix tier needs
``MatchField.NAME_PREFIX``. Exactly one match resolves. Zero matches after all
tiers is a NotFoundError; two or more at the first matching tier is an
AmbiguityError and never falls through to a looser tier.
"""
from enum import Enum
from typing import Any, Callable, FrozenSet, Iterable, List, Optional, Sequence, Tuple

from morpheus_provisioner.domain.core.exceptions import (
    AmbiguityError,
    ConfigurationError,
    NotFoundError,
)
from morpheus_provisioner.domain.reference.value_objects import (
    Candidate,
    ReferenceKind,
    ResolvedReference,
)


class MatchField(str, Enum):
    """Candidate attributes a stage allows a token to match."""
    ID = "id"
    NAME = "name"
    CODE = "code"
    EXTERNAL_ID = "external_id"
    VALUE = "value"
    NAME_PREFIX = "name_prefix"


Matcher = Callable[[str, Candidate, FrozenSet[MatchField]], bool]


def exact_match(token: str, candidate: Candidate, fields: FrozenSet[MatchField]) -> bool:
    if MatchField.ID in fields and candidate.id_str == token:
        return True
    if MatchField.NAME in fields and candidate.name == token:
        return True
    if MatchField.CODE in fields and candidate.code == token:
        return True
    if MatchField.EXTERNAL_ID in fields and candidate.external_id == token:
        return True
    return False


def value_match(token: str, candidate: Candidate, fields: FrozenSet[MatchField]) -> bool:
    if MatchField.VALUE not in fields:
        return False
    numeric = candidate.numeric_value
    return numeric is not None and str(numeric) == token


def prefix_match(token: str, candidate: Candidate, fields: FrozenSet[MatchField]) -> bool:
    # names like "Datastore-A - 1.2TB Free" carry a decorative suffix;
    # "Datastore-A2" is a different datastore, not a suffixed "Datastore-A"
    if MatchField.NAME_PREFIX not in fields or not candidate.name.startswith(token):
        return False
    rest = candidate.name[len(token):]
    return not rest or not rest[0].isalnum()


MATCH_TIERS: Tuple[Tuple[str, Matcher], ...] = (
    ("exact", exact_match),
    ("value", value_match),
    ("prefix", prefix_match),
)


class NameOrIdResolver:
    """Decide whether a token identifies exactly one candidate."""

    def __init__(self, tiers: Sequence[Tuple[str, Matcher]] = MATCH_TIERS):
        self._tiers = tuple(tiers)

    @property
    def tier_names(self) -> List[str]:
        return [name for name, _ in self._tiers]

    def find_matches(self, token: str, candidates: Sequence[Candidate],
                     match_fields: Iterable[MatchField]) -> Tuple[Optional[str], List[Candidate]]:
        """
        Return the first tier with any match and its matches.

        Returns ``(None, [])`` when no tier matches.
        """
        fields = frozenset(match_fields)
        for tier_name, matcher in self._tiers:
            matches = [c for c in candidates if matcher(token, c, fields)]
            if matches:
                return tier_name, matches
        return None, []

    def resolve(self,
                token: str,
                candidates: Sequence[Candidate],
                match_fields: Iterable[MatchField],
                kind: ReferenceKind,
                reference_id: Optional[Callable[[Candidate], Any]] = None,
                hint: Optional[str] = None) -> ResolvedReference:
        """
        Resolve ``token`` to a single reference of ``kind``.

        Args:
            token: Name, code or id supplied by the user
            candidates: Candidate set fetched for this stage
            match_fields: Attributes the token may match
            kind: Kind of the produced reference, also the stage name in errors
            reference_id: Picks the reference id from the winning candidate
                (defaults to ``candidate.id``)
            hint: Extra guidance appended to not-found and ambiguity messages

        Raises:
            ConfigurationError: If the token is empty
            NotFoundError: If no tier matches
            AmbiguityError: If the first matching tier matches more than once
        """
        if token is None or str(token).strip() == "":
            raise ConfigurationError(f"A {kind.value} token is required", missing_fields=[kind.value])
        token = str(token)

        _, matches = self.find_matches(token, candidates, match_fields)
        if not matches:
            raise NotFoundError(kind.value, token, hint)
        if len(matches) > 1:
            raise AmbiguityError(kind.value, token, len(matches), hint)

        winner = matches[0]
        return ResolvedReference.from_candidate(
            kind,
            winner,
            reference_id=reference_id(winner) if reference_id else None,
        )
