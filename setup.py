from setuptools import setup, find_packages

setup(
    name="parquet_to_mysql",
    version="0.1.0",
    packages=find_packages(include=["parquet_to_mysql", "parquet_to_mysql.*"]),
    include_package_data=True,
    python_requires=">=3.9",
    install_requires=[
        'click>=8.1.8',
        'polars>=1.27.1',
        'pyarrow>=19.0.1',
        'rich>=13.9.4',
    ],
    extras_require={
        'test': [
            'pytest>=8.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'parquet-to-mysql=parquet_to_mysql.cli.commands:main',
            'parquet-to-mysql-schema=parquet_to_mysql.cli.commands:schema',
        ],
    },
)
