"""Run the Kusayakyu console: python -m kusayakyu"""

import sys

from kusayakyu.console import main

if __name__ == "__main__":
    sys.exit(main())
