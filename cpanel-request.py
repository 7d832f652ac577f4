#!/usr/bin/env python3

import sys

from cpanel_api.cli import main


if __name__ == '__main__':
    sys.exit(main())
