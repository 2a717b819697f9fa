#!/usr/bin/env python3

from setuptools import setup, find_packages

# Read the README file for long description
try:
    with open("README.md", "r", encoding="utf-8") as fh:
        long_description = fh.read()
except FileNotFoundError:
    long_description = "pyharalick - Haralick texture features from gray-level co-occurrence matrices"


# Read requirements from requirements.txt
def read_requirements(filename="requirements-library.txt"):
    """Read requirements from requirements.txt, ignoring comments and blank lines."""
    with open(filename, "r", encoding="utf-8") as f:
        lines = f.readlines()
    return [
        line.strip()
        for line in lines
        if line.strip() and not line.strip().startswith("#")
    ]


setup(
    name="pyharalick",
    version="1.0.0",
    author="pyharalick developers",
    description="pyharalick computes the 14 Haralick texture features (including the maximal correlation "
                "coefficient) from a gray-level co-occurrence probability matrix.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["pyharalick", "pyharalick.*"]),
    license="MIT",
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Image Processing",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.9",
    install_requires=read_requirements(),
    extras_require={
        "test": [
            "pytest>=7.0",
            "pytest-cov>=4.0",
            "scipy>=1.9",
        ],
        "dev": [
            "pytest>=7.0",
            "pytest-cov>=4.0",
            "scipy>=1.9",
            "black>=23.0",
            "flake8>=6.0",
            "mypy>=1.0",
        ]
    },
    include_package_data=True,
    keywords="texture-analysis haralick glcm co-occurrence-matrix image-features",
)
