# setup.py
import os.path
import re

from setuptools import setup


def getVersion():
    path = os.path.join(os.path.dirname(__file__), "screentype", "misc.py")

    with open(path, "r", encoding="UTF-8") as f:
        return re.search(r'^version = "(.+)"', f.read(), re.M).group(1)


setup(
    name="screentype",
    version=getVersion(),
    description="Screenplay layout and pagination to PostScript and PDF",
    long_description="""\
screentype lays out screenplays written in a small XML vocabulary on
typewriter-style fixed pitch pages, following standard screenplay
conventions: scene numbering, (MORE) and (CONT'D) on dialogue split
across pages, keeping scene headings with what follows them, and so on.
The result is written as PostScript or PDF.""",
    license="GPL",
    packages=["screentype"],
    python_requires=">=3.6",
    install_requires=["lxml", "reportlab"],
    extras_require={"test": ["pytest"]},
    entry_points={
        "console_scripts": ["screentype = screentype.main:main"],
    },
)
