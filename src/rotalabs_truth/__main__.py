import sys

from rotalabs_truth.cli import main

sys.exit(main())
