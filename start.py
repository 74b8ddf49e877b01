#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""Entry Point running the demonstration of the defer package."""

import sys

import defer

if __name__ == "__main__":
    sys.exit(defer.main())
