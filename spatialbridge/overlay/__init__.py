# -*- coding: utf-8 -*-
"""The overlay package computes new geometry from feature tables: dissolve, intersect and union."""
