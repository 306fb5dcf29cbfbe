# setup.py
from setuptools import setup, find_packages

setup(
    name="lish",
    version="0.1.0",
    description="A Lisp interpreter that doubles as a command shell",
    packages=find_packages(include=["lish", "lish.*"]),
    python_requires=">=3.9",
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": ["lish = lish.__main__:main"],
    },
    zip_safe=False,
)
