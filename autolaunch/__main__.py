# -*- coding: utf-8 -*-
"""AutoLaunch: Main application

Copyright (c) 2012-2013 David H. Bronke
Licensed under the MIT license; see the LICENSE file for details.

"""
import sys

from .session import main


sys.exit(main())
