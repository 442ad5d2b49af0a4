"""Outer surfaces over limbu_suggest: Flask API (web.py) and CLI (__main__.py)."""
