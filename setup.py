"""
Setup script for pysatl-extra.
"""

from setuptools import find_packages, setup

setup(
    name="pysatl-extra",
    version="0.1.0",
    description="Additional univariate distribution families for PySATL",
    author="PySATL project",
    license="MIT",
    package_dir={"": "src"},
    packages=find_packages("src"),
    python_requires=">=3.12",
    install_requires=[
        "numpy>=2.0",
        "scipy>=1.13",
        "mypy_extensions>=1.0",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
)
