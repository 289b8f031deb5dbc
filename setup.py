from setuptools import setup, find_packages

setup(
    name="storepulse",
    version="1.0.0",
    packages=find_packages(include=["storepulse", "storepulse.*"]),
    install_requires=[
        "pandas>=2.0",
        "numpy>=1.24",
        "matplotlib>=3.7",
        "python-dateutil>=2.8",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    python_requires=">=3.8",
    description="Month-over-month store analytics: seasonality, root causes and alerts",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ]
)
