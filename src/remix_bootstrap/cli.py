"""Console entry points."""
import asyncio
import sys

from remix_bootstrap.bootstrap import run_bootstrap
from remix_bootstrap.config import load_config
from remix_bootstrap.errors import BootstrapError
from remix_bootstrap.install import run_install
from remix_bootstrap.logging import configure_logging


def main() -> None:
    """Bootstrap remix-browser and hand off, forwarding all arguments."""
    try:
        config = load_config()
    except BootstrapError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(e.exit_code)

    configure_logging(config.log_level)
    sys.exit(asyncio.run(run_bootstrap(config, sys.argv[1:])))


def install_main() -> None:
    """Install remix-browser as a standalone binary."""
    try:
        config = load_config()
    except BootstrapError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(e.exit_code)

    configure_logging(config.log_level)
    sys.exit(asyncio.run(run_install(config)))


if __name__ == "__main__":
    main()
