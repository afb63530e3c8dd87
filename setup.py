#!/usr/bin/env python
# encoding: utf-8
from setuptools import setup
import io

setup(
    name="praatgrid",
    python_requires=">3.6.0",
    version="1.0.0",
    package_dir={"praatgrid": "praatgrid"},
    packages=["praatgrid", "praatgrid.utilities", "praatgrid.data_classes"],
    install_requires=[
        "typing_extensions",
    ],
    extras_require={
        "test": ["pytest"],
    },
    description=(
        "A strict reader for praat textgrids: "
        "time aligned annotations of audio recordings."
    ),
    long_description=io.open("README.md", "r", encoding="utf-8").read(),
    long_description_content_type="text/markdown",
)
