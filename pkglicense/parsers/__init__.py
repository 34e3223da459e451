"""License collectors per package ecosystem."""

from pkglicense.parsers.npm import NpmLicenseCollector

__all__ = ["NpmLicenseCollector"]
