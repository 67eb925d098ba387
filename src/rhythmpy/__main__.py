"""Main function for rhythmpy."""

from rhythmpy.core import cli


def run_main() -> None:
    """Main entry point to rhythmpy."""
    cli.app()


if __name__ == "__main__":
    cli.app()
