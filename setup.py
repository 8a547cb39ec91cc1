from setuptools import setup, find_packages

setup(
    name="sudoku-collapse",
    version="1.0.0",
    description="Sudoku solving by constraint propagation with undoable board diffs",
    author="robomotic",
    packages=find_packages(include=["sudoku_collapse", "sudoku_collapse.*"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy>=1.21.0",
        "tqdm>=4.62.0",
    ],
    extras_require={
        "dev": ["pytest>=7.0.0"],
    },
    entry_points={
        "console_scripts": [
            "sudoku-collapse=sudoku_collapse.cli:main",
        ],
    },
)
