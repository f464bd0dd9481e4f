import sys

from learnquest.cli import main

sys.exit(main())
