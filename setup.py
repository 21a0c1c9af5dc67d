# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="woolly",
    version="0.1.0",
    description="Rojo project manifest generator and scaffolding CLI for layered Luau source trees",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["woolly*"]),
    package_data={
        "woolly.interface": ["locales/*.json"],
    },
    include_package_data=True,
    python_requires=">=3.9",
    install_requires=[],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        'console_scripts': [
            'woolly=woolly.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
