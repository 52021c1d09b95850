from setuptools import setup, find_packages
import re
import os

__version__ = re.findall(
    r"""__version__ = ["']+([0-9\.]*)["']+""",
    open("pyintersect/__init__.py").read(),
)[0]

this_directory = os.path.abspath(os.path.dirname(__file__))
with open(os.path.join(this_directory, "README.md"), encoding="utf-8") as f:
    long_description = f.read()

setup(
    name="pyintersect",
    version=__version__,
    description="pyIntersect traces the intersection and self-intersection curves of parametric surfaces",
    long_description=long_description,
    long_description_content_type="text/markdown",
    keywords="geometry surface intersection marching",
    author="",
    author_email="",
    license="Apache License Version 2.0",
    packages=find_packages(include=["pyintersect*"]),
    install_requires=["numpy>=1.17", "scipy>=1.2", "mdolab-baseclasses"],
    extras_require={
        "testing": ["parameterized", "testflo", "pytest"],
    },
    classifiers=["Operating System :: OS Independent", "Programming Language :: Python"],
)
