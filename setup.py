from setuptools import setup, find_packages

VERSION = open("flatblog/VERSION").read().strip()

reqs = open("requirements.txt").read().strip().split("\n")

test_reqs = open("requirements-test.txt").read().strip().split("\n")

setup(
    name="flatblog",
    version=VERSION,
    packages=find_packages(exclude=["tests.*", "tests"]),
    include_package_data=True,
    package_data={"flatblog": ["py.typed", "VERSION", "default_template.html"]},
    zip_safe=False,
    install_requires=reqs,
    extras_require={"tests": test_reqs},
    entry_points={
        "console_scripts": [
            "flatblog-serve=flatblog.cli:serve",
            "flatblog-regenerate=flatblog.cli:regenerate",
            "flatblog-init=flatblog.cli:init_site",
            "flatblog-config=flatblog.cli:config_cli",
        ]
    },
)
