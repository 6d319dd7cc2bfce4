# -*- coding: utf-8 -*-
"""The filters package selects rows of feature tables.

Attribute filters evaluate conditions over attribute columns; spatial filters select rows by measured geometry.
Neither changes the geometry of the rows it keeps.
"""
