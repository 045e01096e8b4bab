"""
Setup file.
"""

import os

from setuptools import find_packages, setup

URL = "https://github.com/cloudflash/cloudflash"
KEYWORDS = "iot firmware cloud compile flash ota microcontroller particle"
HERE = os.path.dirname(os.path.abspath(__file__))

INSTALL_REQUIRES = [
    "requests>=2.28",
    "tqdm>=4.64",
]

EXTRAS_REQUIRE = {
    "test": [
        "pytest>=7.0",
    ],
}


if __name__ == "__main__":
    setup(
        name="cloudflash",
        version="0.1.0",
        description="Compile, download and flash firmware through a cloud IoT API",
        keywords=KEYWORDS,
        url=URL,
        python_requires=">=3.10",
        package_dir={"": "src"},
        packages=find_packages(where="src"),
        install_requires=INSTALL_REQUIRES,
        extras_require=EXTRAS_REQUIRE,
        entry_points={
            "console_scripts": [
                "cloudflash=cloudflash.cli:main",
            ],
        },
        include_package_data=True)
