import sys

from eyebot.cli import main

sys.exit(main())
