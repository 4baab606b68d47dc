import sys

from .main_app import main

sys.exit(main())
