import sys

from ecc_elgamal.cli import main

sys.exit(main())
