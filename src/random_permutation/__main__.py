import sys

from random_permutation.cli import main

sys.exit(main())
