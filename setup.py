"""Setup script for the project."""

from setuptools import setup, find_packages

setup(
    name="fitquest-core",
    version="1.0.0",
    description="Group workout tracker core: entries, counters, leaderboard and snapshot sync",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "pydantic>=2.0",
        "pydantic-settings>=2.0",
        "httpx>=0.24",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "pytest-asyncio>=0.21",
        ],
    },
    python_requires=">=3.10",
)
