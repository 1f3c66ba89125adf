"""Main entry point when executing mockdrills as a package.

This allows running the package using python -m mockdrills.
"""

from mockdrills.main import cli_entry_point

if __name__ == "__main__":
    cli_entry_point()
