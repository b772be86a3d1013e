#!/usr/bin/env python3
"""
setup script for postgen
"""

from setuptools import setup, find_packages

# read the readme file for the long description
with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

# read requirements from requirements.txt, skip comments and empty lines
with open("requirements.txt", "r", encoding="utf-8") as fh:
    requirements = [line.strip() for line in fh if line.strip() and not line.startswith("#")]

# configure the package setup
setup(
    name="mroomy-postgen",
    version="1.0.0",
    author="mroomy",
    author_email="-",
    description="Generate social media posts from client questionnaires and room visualizations",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="-",
    # automatically find all packages in the project
    packages=find_packages(include=["src", "src.*"]),
    # package metadata for pypi
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.9",
    # install all the dependencies from requirements.txt
    install_requires=requirements,
    extras_require={
        "test": ["pytest>=7.0.0", "httpx>=0.25.0"],
    },
    entry_points={
        "console_scripts": ["postgen=src.postgen.cli:app"],
    },
)
