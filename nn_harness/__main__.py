import sys

from nn_harness.main import main

sys.exit(main())
