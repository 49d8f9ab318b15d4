"""
Test utilities package for i18n-retrofit.

This package contains reusable test utilities:

- test_helpers: temporary config files and directories, source file
  writers, and builders for candidates and approved changes
"""
