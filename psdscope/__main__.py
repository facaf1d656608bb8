# Copyright (c) 2026 Psdscope
# SPDX-License-Identifier: MIT

import sys

from psdscope.cli import main

sys.exit(main())
