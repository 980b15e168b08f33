"""
Exclusion Policy Registry

A registry of policies that decide which rows to drop from aligned columns,
given the rows each column matched against its exclusion reference.
"""

from typing import Callable, Dict, List, Optional, Set

from ..errors import InternalError


class ExclusionPolicyRegistry:
    """Registry for exclusion policy functions."""

    def __init__(self):
        self._policies: Dict[str, Callable] = {}
        self._descriptions: Dict[str, str] = {}

    def register(self, name: str, description: str = "") -> Callable:
        """
        Decorator to register a policy function.

        A policy takes the per-column sets of matched row positions and the
        number of rows, and returns the set of rows to remove from every column.

        Args:
            name: Name of the policy
            description: Description of what this policy removes

        Returns:
            Decorator function
        """

        def decorator(func: Callable) -> Callable:
            self._policies[name] = func
            self._descriptions[name] = description
            return func

        return decorator

    def get_policy(self, name: str) -> Optional[Callable]:
        """Get a policy function by name."""
        return self._policies.get(name)

    def list_policies(self) -> Dict[str, str]:
        """Get all registered policies with their descriptions."""
        return {name: self._descriptions.get(name, "") for name in self._policies.keys()}

    def validate_policy_output(self,
                               removed: Set[int],
                               matches: List[Set[int]],
                               num_rows: int,
                               policy_name: str) -> Set[int]:
        """
        Check that a policy only removes rows that exist and matched somewhere.

        Raises:
            InternalError: If validation fails
        """
        out_of_range = [row for row in removed if not 0 <= row < num_rows]
        if out_of_range:
            raise InternalError(
                f"Exclusion policy '{policy_name}' removed rows outside the data: "
                f"{sorted(out_of_range)[:10]}"
            )

        matched_anywhere = set().union(*matches) if matches else set()
        unmatched = removed - matched_anywhere
        if unmatched:
            raise InternalError(
                f"Exclusion policy '{policy_name}' removed rows that matched no reference: "
                f"{sorted(unmatched)[:10]}"
            )

        return removed


# Global registry instance
policy_registry = ExclusionPolicyRegistry()


def register_policy(name: str, description: str = "") -> Callable:
    """Convenience function to register an exclusion policy."""
    return policy_registry.register(name, description)
