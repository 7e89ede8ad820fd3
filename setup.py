"""Setup script for the indoorair package."""

from setuptools import find_packages, setup

setup(
    name="indoorair",
    version="0.1.0",
    description="Indoor air sensor bridge for home automation hosts",
    author="Samuel Chassot",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    install_requires=[
        "pyyaml",
        "python-dotenv",
        "paho-mqtt>=2.0.0",
        "aiohttp",
        "rich",
    ],
    extras_require={
        "dev": [
            "pytest",
            "pytest-asyncio",
            "black",
            "isort",
            "mypy",
        ],
    },
    entry_points={
        "console_scripts": [
            "indoorair-bridge=indoorair.bridge:main",
            "indoorair-display=indoorair.display:main",
        ],
    },
)
