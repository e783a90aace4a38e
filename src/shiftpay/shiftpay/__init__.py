"""Shift pay package.

Organized by feature modules (patterns, shifts, payroll, forecast) with pure
engine code at the bottom, thin service/repository layers above it and a thin
Flask controller layer on top.
"""
