# Standard imports
import glob, os
from setuptools import setup, find_packages


# Begin setup
setup_keywords = dict()
setup_keywords['name'] = 'geoschem-j'
setup_keywords['description'] = 'Python package for mapping photolysis frequencies onto GEOS-Chem J-values'
setup_keywords['author'] = 'geoschem-j developers'
setup_keywords['license'] = 'BSD'
setup_keywords['version'] = '0.0.dev0'
# Use README.md as long_description.
setup_keywords['long_description'] = ''
if os.path.exists('README.md'):
    with open('README.md') as readme:
        setup_keywords['long_description'] = readme.read()
setup_keywords['python_requires'] = '>=3.11'
setup_keywords['install_requires'] = [
    'numpy>=2.0', 'xarray', 'scipy', 'h5netcdf']
setup_keywords['extras_require'] = {
    'dev': ['pytest'],
}
setup_keywords['zip_safe'] = False
setup_keywords['packages'] = find_packages()

if os.path.isdir('bin'):
    setup_keywords['scripts'] = [fname for fname in glob.glob(os.path.join('bin', '*'))
                                 if not os.path.basename(fname).endswith('.rst')]

setup(**setup_keywords)
