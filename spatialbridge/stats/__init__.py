# -*- coding: utf-8 -*-
"""The stats package measures feature tables (areas and area summaries)."""
