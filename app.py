#!/usr/bin/env python3
"""Hugging Face Spaces entry point launching the Gradio front-end."""

from rhyme_suffix.app.app import main

if __name__ == "__main__":
    main()
