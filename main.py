#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""jsonbench — JSON / XML / YAML 工作台  入口"""

import sys

from jsonbench.cli import main

if __name__ == '__main__':
    sys.exit(main())
