#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# utils/i18n.py - Translation support
#
import gettext
import os

# Default for system install
locale_dir = '/usr/share/locale'

# Running from an AppImage: usr/share/osd/utils -> usr/share/locale
if 'APPIMAGE' in os.environ or 'APPDIR' in os.environ:
    script_dir = os.path.dirname(os.path.abspath(__file__))
    share_dir = os.path.dirname(os.path.dirname(script_dir))
    appimage_locale = os.path.join(share_dir, 'locale')

    if os.path.isdir(appimage_locale):
        locale_dir = appimage_locale

gettext.bindtextdomain("osd", locale_dir)
gettext.textdomain("osd")

_ = gettext.gettext
