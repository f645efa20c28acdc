"""
Cross‑cutting pieces: settings, logging setup and the error envelope.
"""
