"""Setup configuration for todostore package."""

from setuptools import setup, find_packages

with open("requirements.txt") as f:
    requirements = f.read().splitlines()

setup(
    name="todostore",
    version="0.1.0",
    description="Per-owner task records over a composite-key store",
    author="m0ntydad0n",
    packages=find_packages(include=["todostore", "todostore.*"]),
    install_requires=requirements,
    extras_require={
        "test": ["pytest>=7.0", "fakeredis>=2.10"],
    },
    entry_points={
        "console_scripts": [
            "todostore=todostore.__main__:main",
        ],
    },
    python_requires=">=3.8",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)
