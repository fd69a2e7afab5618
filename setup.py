# -*- coding: utf-8 -*-
#
# setup.py

import ast

import setuptools

APPNAME = "merge2048"


def get_version() -> str:
    """Read `__version__` without importing the package, whose
    dependencies may not be installed yet.
    """

    with open(f"{APPNAME}/__init__.py", "r", encoding="utf-8") as init:
        for line in init:
            if line.startswith("__version__"):
                version = ast.literal_eval(line.split("=")[-1].strip())
                return ".".join(map(str, version))
    raise RuntimeError("Couldn't find '__version__'")


def readme() -> str:
    with open("README.rst", "r", encoding="utf-8") as rst:
        return rst.read()


setuptools.setup(
    name=APPNAME,
    version=get_version(),
    author="Daniel Diniz",
    author_email="daniel_asl_diniz@protonmail.com",
    description="Sliding-tile merge puzzle engine with one-step undo.",
    long_description=readme(),
    long_description_content_type="text/x-rst",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: GNU General Public License v3 or later (GPLv3+)",
        "Programming Language :: Python :: 3.8",
        "Topic :: Games/Entertainment :: Puzzle Games",
    ],
    install_requires=["appdirs>=1"],
    extras_require={"test": ["pytest>=6"]},
    packages=[APPNAME],
    python_requires=">=3.8",
    license="GPL",
    zip_safe=True,
)
