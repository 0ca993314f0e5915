#!/usr/bin/env python3
import os

from setuptools import find_packages, setup

here = os.path.dirname(os.path.realpath(__file__))


def read_version():
    version = {}
    with open(os.path.join(here, "src", "pysci2", "_version.py")) as f:
        exec(f.read(), version)
    return version["version"]


setup(
    name="pysci2",
    version=read_version(),
    author="R3B",
    description="Python package for the hit-level reconstruction of Sci2 scintillator data",
    long_description="",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.9",
    install_requires=[
        "awkward>=2",
        "colorlog",
        "h5py>=3.2",
        "legend-pydataobj>=1.5,<2",
        "numpy",
        "pyyaml",
    ],
    extras_require={
        "test": [
            "pytest>=6",
        ],
    },
    entry_points={
        "console_scripts": [
            "pysci2=pysci2.cli:pysci2_cli",
        ],
    },
    zip_safe=False,
)
