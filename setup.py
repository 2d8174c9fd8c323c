"""Setup configuration for the fact-puzzle package."""

from setuptools import find_packages, setup

setup(
    name="fact-puzzle",
    version="0.1.0",
    packages=find_packages(include=["puzzle_facts", "puzzle_facts.*", "puzzle_service", "puzzle_service.*"]),
    python_requires=">=3.9",
    install_requires=[
        "numpy",
        "fastapi",
        "uvicorn",
        "python-multipart",
        "pillow>=10.1",
        "pydantic",
        "pydantic-settings",
    ],
    extras_require={
        "dev": [
            "pytest",
            "pytest-cov",
            "httpx",
            "black",
            "flake8",
            "mypy",
            "isort",
        ],
    },
    entry_points={
        "console_scripts": [
            "fact-puzzle=puzzle_facts.cli:main",
        ],
    },
)
