"""
Setup script for the trivia-client package.

Source layout: the importable package lives under src/trivia_client.
"""

from setuptools import setup, find_packages

setup(
    name="trivia-client",
    version="1.0.0",
    description="Client-side session core for a real-time multiplayer trivia game",
    python_requires=">=3.10",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "python-socketio>=5.10",
        "aiohttp>=3.9",
        "pydantic>=2.5.0",
        "python-dotenv>=1.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "trivia-client=trivia_client.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Framework :: AsyncIO",
    ],
)
