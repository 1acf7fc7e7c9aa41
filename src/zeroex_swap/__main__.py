import sys

from zeroex_swap.cli import main

sys.exit(main())
