import os

from setuptools import setup

# fullsplit and packages calculation inspired by django setup.py

def fullsplit(path):
    result = []
    while path:
        path, tail = os.path.split(path)
        result.append(tail)
    result.reverse()
    return result

srcdir = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'src')

packages = []
for path, dirs, files in os.walk(srcdir):
    if '__pycache__' in dirs:
        dirs.remove('__pycache__')
    if '__init__.py' in files:
        packages.append('.'.join(fullsplit(os.path.relpath(path, srcdir))))

setup(
    name='eulquery',
    version='0.1.0',
    description='Compiled XPath queries over in-memory document trees',
    author='Emory University Libraries',
    author_email='libsysdev-l@listserv.cc.emory.edu',
    package_dir={'': 'src'},
    packages=packages,
    install_requires=[
        'lxml',
        'ply',
    ],
    extras_require={
        'test': ['pytest'],
    },
)
