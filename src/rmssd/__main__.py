import sys

from src.rmssd.cli import main

sys.exit(main())
