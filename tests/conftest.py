"""Test configuration ensuring the project source tree is importable."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent

root_str = str(ROOT)
if root_str not in sys.path:
    sys.path.insert(0, root_str)


# A create-react-app runtime chunk, trimmed to the loader assignments.
CRA_RUNTIME = (
    '!function(){"use strict";var e,t,r,n,o,i={},u={};function a(e){var t=u[e];'
    "if(void 0!==t)return t.exports;var r=u[e]={exports:{}};return i[e](r,r.exports,a),r.exports}"
    'a.m=i,a.d=function(e,t){},a.f={},a.e=function(e){return Promise.all([])},'
    'a.u=function(e){return"static/js/"+({102:"xlsx",133:"pdfmake"}[e]||e)+"."'
    '+{13:"552027bd",59:"8a314126",102:"d55488e0",133:"0f7a3c21"}[e]+".chunk.js"},'
    'a.miniCssF=function(e){return"static/css/"+e+"."+{59:"c1d2e3f4"}[e]+".chunk.css"},'
    'a.p="/"}();'
)


@pytest.fixture
def cra_runtime() -> str:
    return CRA_RUNTIME


@pytest.fixture
def runtime_file(tmp_path) -> Path:
    path = tmp_path / "runtime-main.4a5b6c7d.js"
    path.write_text(CRA_RUNTIME, encoding="utf-8")
    return path
