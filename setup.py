#!/usr/bin/env python3
"""
Setup script for the SRT Editor.
"""

from setuptools import setup

setup(
    name='srt-editor',
    version='1.10.0',
    description='SubRip subtitle clean-up: encodings, Cyrillic transliteration and timing fixes',
    packages=['core', 'plugins', 'ui', 'utils'],
    py_modules=['srted'],
    python_requires='>=3.8',
    install_requires=[
        'charset-normalizer>=3.0',
    ],
    extras_require={
        'test': [
            'pytest>=7.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'srted=srted:run',
        ],
    },
)
