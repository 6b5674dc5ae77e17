import sys

from nlp_studio.cli import main

sys.exit(main())
