"""Prettization engine and the memoizing service around it."""
