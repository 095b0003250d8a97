"""Operator command-line tools"""
