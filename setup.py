from setuptools import setup, find_packages


install_requires = [
    'PyYAML>=3.0',
    'pyproj>=2',
    'jsonschema>=4',
]

extras_require = {
    'test': [
        'pytest',
        'Pillow>=9',
    ],
}


def long_description(changelog_releases=10):
    import re
    import textwrap

    readme = open('README.md').read()
    changes = ['\nChanges\n-------\n']
    version_line_re = re.compile(r'^\d\.\d+\.\d+\S*\s20\d\d-\d\d-\d\d')
    for line in open('CHANGES.txt'):
        if version_line_re.match(line):
            if changelog_releases == 0:
                break
            changelog_releases -= 1
        changes.append(line)

    changes.append(textwrap.dedent('''
        Older changes
        -------------
        See CHANGES.txt
        '''))
    return readme + ''.join(changes)


setup(
    name='gpkgtiles',
    version="1.1.0",
    description='Read and write raster tiles in OGC GeoPackage files',
    long_description=long_description(7),
    long_description_content_type='text/markdown',
    author='The gpkgtiles authors',
    license='Apache Software License 2.0',
    packages=find_packages(),
    include_package_data=True,
    entry_points={
        'console_scripts': [
            'gpkg-tiles = gpkgtiles.script.util:main',
        ],
    },
    package_data={'': ['*.json']},
    install_requires=install_requires,
    extras_require=extras_require,
    python_requires='>=3.9',
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "License :: OSI Approved :: Apache Software License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3 :: Only",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "Topic :: Database",
        "Topic :: Scientific/Engineering :: GIS",
    ],
    zip_safe=False
)
