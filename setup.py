from setuptools import setup
from cmdlineargs.const import VERSION_STR, DESCRIPTION

setup(
    name="cmdlineargs",
    version=VERSION_STR,
    python_requires='>=3.10',
    description=DESCRIPTION,
    packages=["cmdlineargs"],
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "cmdlineargs = cmdlineargs:main",
        ],
    },
    license="MIT",
    platforms="any",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
)
