"""CLI entry point for design-viewer.

Run from the repository root:

    python . sites
    python . layout shop home --viewport mobile
    python . mcp serve --transport http
"""

import sys

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from design_viewer.cli import main  # noqa: E402

if __name__ == "__main__":
    sys.exit(main())
