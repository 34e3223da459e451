"""License policies applied to collected dependency records."""

from pkglicense.runtime.policies.whitelist import (
    compile_patterns,
    find_violations,
    license_string,
    package_name,
)

__all__ = ["compile_patterns", "find_violations", "license_string", "package_name"]
