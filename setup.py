""" bitauth build script for setuptools.

"""

from setuptools import find_packages, setup  # type: ignore

import bitauth

with open("README.md", "r", encoding="ascii") as file_:
    longdescription = file_.read()

setup(
    name=bitauth.name,
    version=bitauth.__version__,
    license=bitauth.__license__,
    author=bitauth.__author__,
    author_email=bitauth.__author_email__,
    description="BitAuth: secp256k1 identities and ECDSA message authentication",
    long_description=longdescription,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    install_requires=["dataclasses_json", "pycryptodome"],
    extras_require={
        "secp256k1": ["btclib_libsecp256k1"],
        "test": ["pytest", "coincurve"],
    },
    keywords=(
        "bitauth bitcoin cryptography elliptic-curves secp256k1 ecdsa "
        "der base58 sin identity authentication"
    ),
    python_requires=">=3.8",
    classifiers=[
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Natural Language :: English",
        "Operating System :: OS Independent",
        "Topic :: Security :: Cryptography",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
)
