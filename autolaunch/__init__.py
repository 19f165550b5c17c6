# -*- coding: utf-8 -*-
"""AutoLaunch: Staggered launcher for XDG autostart applications

Copyright (c) 2012-2013 David H. Bronke
Licensed under the MIT license; see the LICENSE file for details.

"""
