"""
CLI Package.

Startup checks and the interactive shell (Rich). Entry point is cli.py
at the project root.

Usage:
    python cli.py
    python cli.py --address 127.0.0.1:10818 --verbose
"""
