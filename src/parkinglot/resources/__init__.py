"""Bundled command scripts and expected outputs"""
