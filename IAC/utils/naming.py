"""
Resource naming conventions for consistent Azure resource names.

Follows pattern: {project}-{environment}-{resource}
"""

from dataclasses import dataclass


@dataclass
class ResourceNamer:
    """
    Generates consistent resource names for Azure resources.

    Attributes:
        project: Project identifier
        environment: Deployment environment (dev, staging, prod)
    """
    project: str
    environment: str

    def name(self, resource: str) -> str:
        """
        Generate a resource name.

        Args:
            resource: Resource identifier (e.g., 'web', 'workers')

        Returns:
            Formatted resource name
        """
        return f"{self.project}-{self.environment}-{resource}"

    def computer_name_prefix(self, resource: str) -> str:
        """
        Generate a host name prefix for scale set instances.

        Azure appends a six character instance suffix, so the prefix is
        kept short and free of separators.

        Args:
            resource: Resource identifier

        Returns:
            Host name prefix of at most 9 characters
        """
        return f"{self.environment}{resource}".replace("-", "")[:9]
