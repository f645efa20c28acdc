"""
Version 1 of the API, mounted under ``settings.base_path``.
"""
