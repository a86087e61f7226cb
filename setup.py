#!/usr/bin/env python

from setuptools import setup, find_packages

classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python",
    "Programming Language :: Python :: 3.7",
    "Programming Language :: Python :: 3.9",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Topic :: Communications :: File Sharing",
]

with open("bencanon/_version.py") as f:
    exec(f.read())

with open("README.md") as f:
    long_desc = f.read()

install_requires = []

tests_require = [
    "pytest",
    "pytest-mock",
    "mock",
]

setup(
    name="bencanon",
    version=__version__,
    description="Strict, canonical bencode codec for BitTorrent metadata",
    long_description=long_desc,
    long_description_content_type="text/markdown",
    platforms=["any"],
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=classifiers,
    install_requires=install_requires,
    extras_require={"test": tests_require},
    python_requires=">=3.7",
    zip_safe=True,
)
