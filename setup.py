# -*- coding: utf-8 -*-

from setuptools import find_packages
from setuptools import setup

dependencies = [
    "click",
    "matplotlib",
    "msgpack",
    "numpy",
    "PyQt6",
]

config = {
    "version": "0.1",
    "name": "bubbleoverlay",
    "license": "ISC",
    "description": "data-driven bubbles at named anchor points over an existing matplotlib surface",
    "long_description": __doc__,
    "packages": find_packages(exclude=["tests"]),
    "package_data": {"bubbleoverlay": ["py.typed"]},
    "include_package_data": True,
    "zip_safe": False,
    "platforms": "any",
    "python_requires": ">=3.10",
    "install_requires": dependencies,
    "extras_require": {
        "test": ["pytest"],
    },
    "entry_points": {
        "console_scripts": [
            "bubbleoverlay=bubbleoverlay.cli:cli",
        ],
    },
}

setup(**config)
