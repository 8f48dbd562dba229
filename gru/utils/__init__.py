"""Helpers for files, Git repositories, lists, identifiers and thread-safe containers."""