from setuptools import setup, find_packages

setup(
    name="wifimanager",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    install_requires=[
        "click",
        "toml",
        "rumps; sys_platform == 'darwin'",
        "pyobjc-framework-CoreWLAN; sys_platform == 'darwin'",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "wifimanager=wifimanager.cli:main",
        ],
    },
    python_requires=">=3.9",
    description="View, rank and join Wi-Fi networks on macOS",
    long_description="A macOS utility that lists nearby Wi-Fi networks ordered by how often you use them and joins them using Keychain passwords when available.",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: MacOS X",
        "Intended Audience :: End Users/Desktop",
        "License :: OSI Approved :: MIT License",
        "Operating System :: MacOS",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: System :: Networking",
    ],
)
