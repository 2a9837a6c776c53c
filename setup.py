from setuptools import setup, find_packages

setup(
    name="aws-ci-credentials",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*", "scripts"]),
    install_requires=[
        "boto3>=1.26.0",
        "aiofiles>=23.1.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
        ],
    },
    python_requires=">=3.9",
    author="Stefano Marzani",
    author_email="stefano@piezo.cc",
    description="Validate temporary AWS credentials in CI and save them as named profiles",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    url="https://github.com/piezox/aws-ci-credentials",
    scripts=["scripts/configure_credentials.py"],
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
)
