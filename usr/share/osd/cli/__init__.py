#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# cli/__init__.py - CLI interface package
#

"""
Command-line interface (CLI) for osd.
"""

from .app import run_cli

__all__ = ['run_cli']
