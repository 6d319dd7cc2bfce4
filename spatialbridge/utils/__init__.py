# -*- coding: utf-8 -*-
"""Shared helpers for CRS checks and geometry parts."""
