import sys

from figma_html.cli import main

if __name__ == "__main__":
    sys.exit(main())
