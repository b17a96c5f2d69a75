#!/usr/bin/env python3
"""
Packaging for boxknife. The runtime requirements are listed among the build requirements in
pyproject.toml, and every unit is installed as a console script of the same name.
"""
from __future__ import annotations

import pathlib
import sys

import setuptools
import toml

HERE = pathlib.Path(__file__).parent.absolute()
BUILD_ONLY = ('setuptools', 'wheel', 'toml')

GITHUB = 'https://github.com/boxknife/boxknife/'
CLASSIFIERS = [
    'Development Status :: 3 - Alpha',
    'Operating System :: OS Independent',
    'Programming Language :: Python :: 3 :: Only',
    'Topic :: Security',
    'Topic :: Text Processing :: Filters',
]


def runtime_requirements() -> list[str]:
    build = toml.load(HERE / 'pyproject.toml')['build-system']['requires']
    return [requirement for requirement in build if not requirement.startswith(BUILD_ONLY)]


def console_scripts(package) -> list[str]:
    scripts = [
        F'{name}={unit.__module__}:{unit.__name__}.run'
        for name, unit in package.registry.units.items()
    ]
    scripts.append('boxknife=boxknife.__main__:main')
    return scripts


def main():
    sys.path.insert(0, str(HERE))
    import boxknife
    setuptools.setup(
        name=boxknife.__distribution__,
        version=boxknife.__version__,
        description='Byte-stream transcoders for hex and URL encoding with a permissive hex decoder.',
        long_description=(HERE / 'README.md').read_text(encoding='utf8'),
        long_description_content_type='text/markdown',
        url=GITHUB,
        classifiers=CLASSIFIERS,
        python_requires='>=3.8',
        packages=setuptools.find_packages(include=('boxknife', 'boxknife.*')),
        install_requires=runtime_requirements(),
        extras_require={'test': ['pytest']},
        entry_points={'console_scripts': console_scripts(boxknife)},
    )


if __name__ == '__main__':
    main()
