"""Test suite for nlp-studio.

Unit tests live under unit/ and run without downloading models: the worker
is driven through the scripted provider in helpers/.
"""
