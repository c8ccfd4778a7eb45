"""Fetch-and-merge orchestration: concurrent fan-out plus structural merge."""
