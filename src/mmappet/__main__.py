from __future__ import annotations

import sys

from mmappet.cli import main

sys.exit(main())
