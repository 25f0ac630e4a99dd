# tests/conftest.py
"""
Shared fixtures and sample single-file components for the sfclint test suite.
"""

import pytest

from sfclint import lint_source


# ---------------------------------------------------------------------------
#  Sample sources
# ---------------------------------------------------------------------------

# <Baz/> sits on line 4, column 5.
BASIC_SFC = """\
<template>
  <div>
    <foo-bar/>
    <Baz/>
  </div>
</template>

<script>
export default {
  components: { FooBar }
}
</script>
"""

FULLY_REGISTERED_SFC = """\
<template>
  <section>
    <my-header title="Hello"></my-header>
    <MyList :items="items" @select="onSelect"/>
    <my_footer/>
  </section>
</template>

<script>
import MyHeader from './MyHeader.vue'
import MyList from './MyList.vue'
import MyFooter from './MyFooter.vue'

export default {
  name: 'Page',
  components: {
    MyHeader,
    'my-list': MyList,
    myFooter: MyFooter,
  },
  data() {
    return { items: [] }
  },
}
</script>
"""

MIXIN_SFC = """\
<template>
  <div>
    <own-widget/>
    <mixed-widget/>
    <base-widget/>
  </div>
</template>

<script>
export default {
  mixins: [{ components: { MixedWidget } }, ExternalMixin],
  extends: { components: { BaseWidget } },
  components: { OwnWidget },
}
</script>
"""

EXTERNAL_TEMPLATE_SFC = """\
<template src="./Widget.html">
  <Baz/>
</template>

<script>
export default {}
</script>
"""

DEFINE_COMPONENT_SFC = """\
<template>
  <Sidebar/>
</template>

<script lang="ts">
import { defineComponent } from 'vue'
import Sidebar from './Sidebar.vue'

export default defineComponent({
  components: { Sidebar },
  setup() {
    const ok = 1 < 2 && "</div>".length > 0
    return { ok }
  },
})
</script>
"""


def make_sfc(template_body: str, components=(), script_extra: str = "") -> str:
    """Wrap ``template_body`` in a component registering ``components``."""
    entries = ", ".join(f"'{name}': Dummy" for name in components)
    return (
        f"<template>\n{template_body}\n</template>\n\n"
        f"<script>\nexport default {{\n  components: {{ {entries} }},{script_extra}\n}}\n</script>\n"
    )


# ---------------------------------------------------------------------------
#  Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def unregistered():
    """Lint a source and return the names reported, in report order."""
    def _run(source, ignore_patterns=None, path="Test.vue"):
        options = None
        if ignore_patterns is not None:
            options = {"no-unregistered-components": {"ignorePatterns": ignore_patterns}}
        diags = lint_source(source, path=path, options=options)
        return [d.evidence["name"] for d in diags]
    return _run


@pytest.fixture
def vue_project(tmp_path):
    """A small project directory with one clean and one faulty component."""
    src = tmp_path / "src"
    (src / "components").mkdir(parents=True)
    (src / "App.vue").write_text(BASIC_SFC, encoding="utf-8")
    (src / "components" / "Page.vue").write_text(FULLY_REGISTERED_SFC, encoding="utf-8")
    (src / "notes.txt").write_text("<Baz/>", encoding="utf-8")
    return tmp_path
