"""Allow `python -m riskpilot`."""
import sys

from riskpilot.cli import main

if __name__ == "__main__":
    sys.exit(main())
