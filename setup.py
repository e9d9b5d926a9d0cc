from setuptools import setup, find_packages
from pathlib import Path

setup(
    name="shape_annotation",
    version=Path("./shape_annotation/VERSION").read_text().strip(),
    packages=find_packages(include=["shape_annotation", "shape_annotation.*"]),
    package_data={"shape_annotation": ["VERSION"]},
    install_requires=[
        "numpy",
        "opencv-python",
        "easydict",
        "matplotlib",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": ["shape_annotation=shape_annotation.cli:main"],
    },
)
