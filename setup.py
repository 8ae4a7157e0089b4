# ---------------------------------------------------------------------
# Gufo Probe: ICMPv4 echo probe
# Python build
# ---------------------------------------------------------------------
# Copyright (C) 2022-25, Gufo Labs
# ---------------------------------------------------------------------

# Third-party modules
from setuptools import find_namespace_packages, setup


def get_long_description() -> str:
    with open("README.md") as f:
        return f.read()


setup(
    name="gufo_probe",
    version="0.1.0",
    description="Minimal asyncio ICMPv4 echo probe",
    long_description=get_long_description(),
    long_description_content_type="text/markdown",
    license="BSD-3-Clause",
    python_requires=">=3.8",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["gufo.*"]),
    package_data={"gufo.probe": ["py.typed"]},
    zip_safe=False,
    install_requires=[],
    extras_require={"test": ["pytest>=7.0"]},
    entry_points={"console_scripts": ["gufo-probe = gufo.probe.cli:main"]},
)
