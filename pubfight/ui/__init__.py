"""
User interface module for the Pub Fight combat simulator.

This module provides the command-line interface used to play party members
by hand, including menus, prompts, and display formatting.
"""
