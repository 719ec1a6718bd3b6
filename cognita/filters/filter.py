"""Include/Exclude/Targets filter for deciding which resources get processed.

Include and Exclude hold resource types (ex: aws_instance). Targets hold
specific resources in the '<type>.<id>' format, where the ID may contain
further '.' characters.
"""

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Sequence, Tuple

from cognita.errors import FilterTargetsInvalidError
from cognita.models import Tag

TARGET_SEPARATOR = "."


@dataclass(frozen=True)
class Filter:
    """The list of all possible filters that can be used to filter the results.

    The membership sets for Include, Exclude and Targets are built once at
    construction. The Filter is frozen so the sets always match the fields
    they were built from, which also makes a single instance safe to share
    across threads.

    Attributes:
        tags: Tags used by resource matching, not evaluated by the Filter.
        include: Resource types to process. Empty means every type.
        exclude: Resource types to skip. Empty means no type is skipped.
        targets: Specific resources to process, as '<type>.<id>'.
    """

    tags: Sequence[Tag] = ()
    include: Sequence[str] = ()
    exclude: Sequence[str] = ()
    targets: Sequence[str] = ()

    _include_set: FrozenSet[str] = field(init=False, repr=False, compare=False)
    _exclude_set: FrozenSet[str] = field(init=False, repr=False, compare=False)
    _targets_set: FrozenSet[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "tags", tuple(self.tags))
        object.__setattr__(self, "include", tuple(self.include))
        object.__setattr__(self, "exclude", tuple(self.exclude))
        object.__setattr__(self, "targets", tuple(self.targets))
        object.__setattr__(self, "_include_set", frozenset(self.include))
        object.__setattr__(self, "_exclude_set", frozenset(self.exclude))
        object.__setattr__(self, "_targets_set", frozenset(self.targets))

    def is_excluded(self, *resource_types: str) -> bool:
        """Check if all the resource_types are on the Exclude list.

        Returns False when Exclude is empty. Called with no resource types
        and a non-empty Exclude it returns True, as all of nothing matches.
        """
        if not self.exclude:
            return False
        return all(res in self._exclude_set for res in resource_types)

    def is_included(self, *resource_types: str) -> bool:
        """Check if all the resource_types are on the Include list.

        Returns True when Include is empty.
        """
        if not self.include:
            return True
        return all(res in self._include_set for res in resource_types)

    def validate(self) -> None:
        """Validate that the Targets have the right format.

        Only the presence of the separator is checked; IDs can contain '.'
        and empty type or ID segments are accepted.

        Raises:
            FilterTargetsInvalidError: For the first target without a '.'.
        """
        for target in self.targets:
            if TARGET_SEPARATOR not in target:
                raise FilterTargetsInvalidError(target)

    def has_targets(self) -> bool:
        """Check if any specific resource was targeted."""
        return bool(self.targets)

    def is_targeted(self, resource_type: str, resource_id: str) -> bool:
        """Check if the resource is one of the Targets."""
        return f"{resource_type}{TARGET_SEPARATOR}{resource_id}" in self._targets_set

    def targets_types_with_ids(self) -> Dict[str, List[str]]:
        """Return the IDs of the Targets grouped by type.

        IDs keep the order they were first seen in and duplicates are
        dropped. Types without targets are not present.

        Raises:
            FilterTargetsInvalidError: If a target has no separator.
        """
        seen: Dict[str, set] = {}
        result: Dict[str, List[str]] = {}

        for target in self.targets:
            resource_type, resource_id = self._split_target(target)
            ids = seen.setdefault(resource_type, set())
            if resource_id not in ids:
                ids.add(resource_id)
                result.setdefault(resource_type, []).append(resource_id)

        return result

    @staticmethod
    def _split_target(target: str) -> Tuple[str, str]:
        resource_type, sep, resource_id = target.partition(TARGET_SEPARATOR)
        if not sep:
            raise FilterTargetsInvalidError(target)
        return resource_type, resource_id

    def __str__(self) -> str:
        return (
            "\n"
            f"\tTags:    {[str(tag) for tag in self.tags]},\n"
            f"\tInclude: {list(self.include)},\n"
            f"\tExclude: {list(self.exclude)},\n"
            f"\tTargets: {list(self.targets)},\n"
        )
