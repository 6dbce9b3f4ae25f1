#!/usr/bin/env python3
"""
Entry point for running WiFi Manager as a module.
"""

if __name__ == "__main__":
    from .cli import main

    main()
