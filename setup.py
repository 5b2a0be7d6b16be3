from setuptools import setup, find_packages


setup(
    name="packplus",
    version="0.1",
    packages=find_packages(include=["packplus", "packplus.*"]),
    description="Dump and pack PackPlus game-asset archives (XOR-obfuscated flat file table).",
    author="vercingetorx",
    install_requires=[
        "pycryptodomex>=3.23.0",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "packplus=packplus.cli:main",
        ]
    },
)
