"""Check command implementation.

This is the only place where license check failures are turned into
user-facing messages and exit codes.
"""

import logging
from typing import Optional

from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from pkglicense.errors import LicenseCheckError, LicenseViolation
from pkglicense.runtime.checker import LicenseCheck
from pkglicense.runtime.config_loader import build_check_config
from pkglicense.runtime.protocols import LicenseCollector

logger = logging.getLogger("pkglicense.cli.check")


def check_command(
    args,
    console: Optional[Console] = None,
    error_console: Optional[Console] = None,
    collector: Optional[LicenseCollector] = None,
) -> int:
    """Execute the license check.

    Args:
        args: Parsed command-line arguments.
        console: Console for the success message.
        error_console: Console for violations and fatal errors.
        collector: License collector override.

    Returns:
        int: Exit code.
    """
    console = console or Console()
    error_console = error_console or Console(stderr=True)

    try:
        config = build_check_config(args)
        result = LicenseCheck(config, collector=collector).run()
    except LicenseViolation as e:
        for violation in e.violations:
            error_console.print(
                escape(violation), style="red", highlight=False, soft_wrap=True
            )
        logger.debug("Violations found in %s", e.directory)
        return 1
    except ValidationError as e:
        error_console.print(
            f"Invalid configuration:\n{escape(str(e))}", style="red", soft_wrap=True
        )
        return 1
    except (LicenseCheckError, ValueError) as e:
        error_console.print(
            escape(str(e)), style="bold red", highlight=False, soft_wrap=True
        )
        return 1

    console.print(escape(result.message), style="green", highlight=False, soft_wrap=True)
    return 0
