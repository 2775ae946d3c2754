# Sphinx configuration file

import os
import sys
sys.path.insert(0, os.path.abspath('../src'))

from crud_ui_flow import __version__

project = 'CRUD UI Flow'
author = 'CRUD UI Flow contributors'
release = __version__
version = '.'.join(release.split('.')[:2])

extensions = [
    'sphinx.ext.autodoc',
    'sphinx.ext.napoleon',
    'sphinx.ext.viewcode',
    'sphinx.ext.intersphinx',
    'sphinx_autodoc_typehints',
]

root_doc = 'index'
exclude_patterns = ['_build']

html_theme = 'sphinx_rtd_theme'
html_title = f'{project} {release}'

# Autodoc settings
autodoc_default_options = {
    'members': True,
    'member-order': 'bysource',
    'show-inheritance': True,
    'exclude-members': '__weakref__, __slots__, model_config',
}
autodoc_type_aliases = {
    'RecordId': 'crud_ui_flow.ui.models.RecordId',
    'CrudEventEmitter': 'crud_ui_flow.flow.types.CrudEventEmitter',
    'InputProvider': 'crud_ui_flow.flow.types.InputProvider',
}
typehints_defaults = 'comma'

# Presenter and broker docstrings use Google style
napoleon_google_docstring = True
napoleon_numpy_docstring = False
napoleon_use_rtype = False

intersphinx_mapping = {
    'python': ('https://docs.python.org/3', None),
    'pydantic': ('https://docs.pydantic.dev/latest', None),
}
