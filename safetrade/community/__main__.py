import sys

from safetrade.community.cli import main

sys.exit(main())
