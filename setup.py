from setuptools import setup, find_packages


setup(
    name="sht4x",
    version="0.1.0",
    description="Asynchronous driver for Sensirion SHT4x temperature and humidity sensors",
    license="0-clause BSD License",
    python_requires=">=3.10",
    install_requires=[
        "amaranth>=0.5,<0.6",
        "smbus2>=0.4",
    ],
    packages=find_packages(include=["sht4x", "sht4x.*"]),
    entry_points={
        "console_scripts": [
            "sht4x = sht4x.cli:run_main"
        ],
    },
    classifiers=[
        'Development Status :: 3 - Alpha',
        'License :: OSI Approved', # ' :: 0-clause BSD License', (not in PyPI)
        'Topic :: Software Development :: Embedded Systems',
        'Topic :: System :: Hardware',
    ],
)
