from setuptools import setup, find_packages

setup(
    name="minesweeper_engine",
    version="0.1",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "pyyaml",
        "numpy"
    ],
    extras_require={
        "test": [
            "pytest"
        ]
    },
    python_requires=">=3.9",
)
