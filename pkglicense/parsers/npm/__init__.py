"""NPM ecosystem license collection.

This package reads installed npm packages from node_modules:
- Resolution of declared dependencies following Node's lookup rules
- Extraction of declared licenses from package.json
- License file discovery and text-based license guessing
"""

from pkglicense.parsers.npm.collector import NpmLicenseCollector
from pkglicense.parsers.npm.license_detect import detect_licenses, guess_license_from_text

__all__ = [
    "NpmLicenseCollector",
    "detect_licenses",
    "guess_license_from_text",
]
