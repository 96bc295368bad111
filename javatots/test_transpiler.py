"""
End-to-end tests for the Java to TypeScript transpiler.

Java source goes through the javalang front end, the transform passes and
the code generator.

Run with: python3 -m pytest javatots/test_transpiler.py
"""

import io
import os
import tempfile
import textwrap
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path

from javatots import JavaToTypeScriptTranspiler, parse_java
from javatots.config import JtsConfig, ModuleMap, PackageMap, load_config
from javatots.errors import JavaSyntaxError, SourceReadError, UnsupportedConstructError
from javatots.j2ts import main, sibling_names
from javatots.parser.ast_nodes import ClassDeclaration, FieldDeclaration, InitializerDeclaration, MethodDeclaration


CORE = ModuleMap(
    'core',
    dest_module='@acme/core',
    package_maps=(PackageMap('com.acme.core', 'src'),),
)
APP = ModuleMap('app', package_maps=(PackageMap('com.acme.app'),))


def java(source):
    return textwrap.dedent(source).lstrip()


def make_transpiler(**kwargs):
    config = JtsConfig(module_maps={'core': CORE, 'app': APP}, **kwargs)
    return JavaToTypeScriptTranspiler(config)


class TestFrontEnd(unittest.TestCase):
    """Test the javalang front end conversion."""

    def test_members_and_modifiers(self):
        unit = parse_java(java('''
            package com.acme;

            public abstract class Shape<T extends Comparable<T>> implements Cloneable {
                protected static final int SIDES = 0;
                private transient String label;

                public abstract double area();
            }
        '''))
        self.assertEqual(unit.package.name, 'com.acme')
        decl = unit.types[0]
        self.assertIsInstance(decl, ClassDeclaration)
        self.assertEqual([m.value for m in decl.modifiers], ['public', 'abstract'])
        self.assertEqual(decl.type_parameters[0].name, 'T')
        self.assertEqual(decl.implements[0].name, 'Cloneable')

        sides, label, area = decl.members
        self.assertIsInstance(sides, FieldDeclaration)
        self.assertEqual([m.value for m in sides.modifiers], ['protected', 'static', 'final'])
        self.assertEqual([m.value for m in label.modifiers], ['private'])
        self.assertIsInstance(area, MethodDeclaration)
        self.assertIsNone(area.body)

    def test_dropped_modifier_warning(self):
        transpiler = make_transpiler()
        result = transpiler.transpile_source(java('''
            class Counter {
                private volatile int count;
            }
        '''), 'core')
        self.assertIn('W004', result.diagnostics.codes())
        self.assertIn('  private count: number;', result.text)

    def test_static_initializer(self):
        unit = parse_java(java('''
            class Registry {
                static {
                    init();
                }
            }
        '''))
        init = unit.types[0].members[0]
        self.assertIsInstance(init, InitializerDeclaration)
        self.assertTrue(init.is_static)

    def test_syntax_error(self):
        with self.assertRaises(JavaSyntaxError) as cm:
            parse_java('public class {', 'Bad.java')
        self.assertEqual(cm.exception.unit, 'Bad.java')


class TestTranspileSource(unittest.TestCase):
    """Test whole compilation units."""

    def test_optional_field_and_for_each(self):
        """Test an Optional field next to a for-each over a List."""
        result = make_transpiler().transpile_source(java('''
            package com.acme.core.service;

            import java.util.List;
            import java.util.Optional;

            public class Greeter {
                private Optional<String> name;

                public void greet(List<String> people) {
                    for (String person : people) {
                        System.out.println("Hello " + person);
                    }
                }
            }
        '''), 'core')
        self.assertEqual(
            result.text,
            'export class Greeter {\n'
            '  private name: string | null;\n'
            '\n'
            '  public greet(people: Array<string>): void {\n'
            '    for (const person of people) {\n'
            '      console.log("Hello " + person);\n'
            '    }\n'
            '  }\n'
            '}\n',
        )

    def test_delombok(self):
        """Test that Lombok accessors are materialized with mapped types."""
        result = make_transpiler().transpile_source(java('''
            package com.acme.core.model;

            import lombok.Getter;
            import lombok.Setter;
            import java.util.Optional;

            @Getter
            @Setter
            public class User {
                private String name;
                private Optional<String> nickname;
            }
        '''), 'core')
        text = result.text
        self.assertNotIn('@Getter', text)
        self.assertNotIn('import', text)
        self.assertIn('  public setName(name: string): void {\n    this.name = name;\n  }', text)
        self.assertIn('  public getNickname(): string | null {\n    return this.nickname;\n  }', text)
        self.assertLess(text.index('setNickname'), text.index('getName'))

    def test_slf4j(self):
        result = make_transpiler().transpile_source(java('''
            package com.acme.core;

            import lombok.extern.slf4j.Slf4j;

            @Slf4j
            public class Job {
                public void run() {
                    log.info("running");
                }
            }
        '''), 'core')
        self.assertEqual(
            result.text,
            'export class Job {\n  public run(): void {\n    console.info("running");\n  }\n}\n',
        )

    def test_cross_module_import(self):
        """Test that an import from another module uses its destModule."""
        result = make_transpiler().transpile_source(java('''
            package com.acme.app;

            import com.acme.core.model.User;

            public class Main {
                public static void main(String[] args) {
                    User user = new User();
                    System.out.println(user);
                }
            }
        '''), 'app')
        self.assertEqual(
            result.text,
            "import { User } from '@acme/core/src/model/User';\n"
            '\n'
            'export class Main {\n'
            '  public static main(args: string[]): void {\n'
            '    let user: User = new User();\n'
            '    console.log(user);\n'
            '  }\n'
            '}\n',
        )

    def test_unresolved_import(self):
        transpiler = make_transpiler(unknown_import_template="import { %s } from 'vendor/%s';")
        result = transpiler.transpile_source(java('''
            package com.acme.core;

            import org.apache.Widget;

            class Panel {
                private Widget widget;
            }
        '''), 'core')
        self.assertTrue(result.text.startswith("import { Widget } from 'vendor/org/apache';\n"))
        self.assertEqual(result.diagnostics.codes(), ['W001'])
        self.assertEqual(transpiler.diagnostics.codes(), ['W001'])

    def test_siblings(self):
        result = make_transpiler().transpile_source(java('''
            package com.acme.core.model;

            class Account {
                private Ledger ledger;
            }
        '''), 'core', siblings=['Ledger', 'Audit'])
        self.assertTrue(result.text.startswith("import { Ledger } from './Ledger';\n\nclass Account {"))

    def test_multi_catch(self):
        result = make_transpiler(comment_throws=True).transpile_source(java('''
            class Loader {
                void load() throws java.io.IOException {
                    try {
                        read();
                    } catch (IOException | IllegalStateException e) {
                        report(e);
                    } finally {
                        close();
                    }
                }
            }
        '''), 'core')
        self.assertIn('  load(): void /* throws java.io.IOException */ {', result.text)
        self.assertIn(
            '    } catch (e) {\n'
            '      if (e instanceof IOException) {\n'
            '        report(e);\n'
            '      } else if (e instanceof IllegalStateException) {\n'
            '        report(e);\n'
            '      } else {\n'
            '        throw e;\n'
            '      }\n'
            '    } finally {\n'
            '      close();\n'
            '    }',
            result.text,
        )

    def test_comments_survive(self):
        result = make_transpiler().transpile_source(java('''
            package com.acme.core.model;

            /** A note. */
            public class Note {
                // the text
                private String text;
            }
        '''), 'core')
        self.assertIn('/** A note. */', result.text)
        self.assertIn('// the text', result.text)

    def test_comments_on_consumed_imports_survive(self):
        """Test that comments above imports the transform table consumes are kept."""
        result = make_transpiler().transpile_source(java('''
            package com.acme.core; // Lists are used for the cache below
            import java.util.List;
            // accessors come from Lombok
            import lombok.Getter;
            /* accessors */
            class C {
                List<String> xs;
            }
        '''), 'core')
        self.assertEqual(
            result.text,
            '// Lists are used for the cache below\n'
            '// accessors come from Lombok\n'
            '/* accessors */\n'
            'class C {\n'
            '  xs: Array<string>;\n'
            '}\n',
        )

    def test_unknown_annotation_policy(self):
        source = java('''
            class Service {
                @Transactional
                public void save() {}
            }
        ''')
        with self.assertRaises(UnsupportedConstructError):
            make_transpiler().transpile_source(source, 'core')
        result = make_transpiler(unknown_annotations='comment').transpile_source(source, 'core')
        self.assertIn('  // @Transactional\n  public save(): void {}', result.text)

    def test_unsupported_construct_names_unit(self):
        """Test that a failure carries the file it happened in."""
        with self.assertRaises(UnsupportedConstructError) as cm:
            make_transpiler().transpile_source(java('''
                class Tasks {
                    Runnable task = new Runnable() {
                        public void run() {}
                    };
                }
            '''), 'core', filename='Tasks.java')
        self.assertEqual(cm.exception.unit, 'Tasks.java')
        self.assertTrue(str(cm.exception).startswith('Tasks.java: '))

    def test_package_template(self):
        result = make_transpiler(package_template='// package: %s').transpile_source(java('''
            package com.acme.core;

            enum Level { LOW, HIGH }
        '''), 'core')
        self.assertEqual(result.text, '// package: com.acme.core\n\nenum Level {\n  LOW,\n  HIGH,\n}\n')


class TestModuleWalk(unittest.TestCase):
    """Test walking configured module directories."""

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmpdir.cleanup)
        self.root = Path(self.tmpdir.name)

        self.write('java/core/src/main/java/com/acme/core/model/User.java', '''
            package com.acme.core.model;

            public class User {
                private Helper helper;
            }
        ''')
        self.write('java/core/src/main/java/com/acme/core/model/Helper.java', '''
            package com.acme.core.model;

            public class Helper {
            }
        ''')
        self.write('java/core/src/main/java/org/other/Thing.java', '''
            package org.other;

            class Thing {
            }
        ''')
        self.write('java/core/src/main/java/com/acme/core/broken/Broken.java', '''
            package com.acme.core.broken;

            public class Broken {
        ''')

        self.config_path = self.root / 'jts-config.yaml'
        self.config_path.write_text(textwrap.dedent(f'''
            inputDirectory: {self.root / 'java'}
            outputDirectory: {self.root / 'ts'}
            moduleMaps:
              core:
                destModule: "@acme/core"
                packageMaps:
                  - pkg: com.acme.core
                    destPath: src
              missing:
                packageMaps:
                  - pkg: com.acme.missing
        '''))

    def write(self, relative, source):
        path = self.root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(java(source))
        return path

    def transpiler(self):
        return JavaToTypeScriptTranspiler(load_config(self.config_path))

    def test_walk_modules(self):
        """Test placement, sibling imports, default placement and per-file failures."""
        transpiler = self.transpiler()
        out = io.StringIO()
        with redirect_stdout(out):
            results = transpiler.walk_modules()
        log = out.getvalue()

        ts = self.root / 'ts' / 'core'
        self.assertEqual(
            results[str(ts / 'src/model/User.ts')],
            "import { Helper } from './Helper';\n\nexport class User {\n  private helper: Helper;\n}\n",
        )
        self.assertEqual(results[str(ts / 'src/model/Helper.ts')], 'export class Helper {}\n')
        self.assertIn(str(ts / 'org/other/Thing.ts'), results)
        self.assertNotIn(str(ts / 'src/broken/Broken.ts'), results)

        self.assertIn('Mapping: ', log)
        self.assertIn('-- com/acme/core/model/User.java -> ', log)
        self.assertIn('Error transpiling ', log)
        self.assertIn('Broken.java', log)
        self.assertIn('Error transpiling module missing', log)
        self.assertIn('I001', transpiler.diagnostics.codes())

    def test_undecodable_file_does_not_stop_walk(self):
        """Test that a file that is not UTF-8 fails alone."""
        util = self.root / 'java/core/src/main/java/com/acme/core/util'
        util.mkdir(parents=True)
        (util / 'A.java').write_bytes(b'package com.acme.core.util;\xff\xfe class A {}\n')
        self.write('java/core/src/main/java/com/acme/core/util/B.java', '''
            package com.acme.core.util;

            public class B {
            }
        ''')

        out = io.StringIO()
        with redirect_stdout(out):
            results = self.transpiler().walk_modules()

        ts = self.root / 'ts' / 'core'
        self.assertNotIn(str(ts / 'src/util/A.ts'), results)
        self.assertEqual(results[str(ts / 'src/util/B.ts')], 'export class B {}\n')
        self.assertIn('A.java: cannot read source', out.getvalue())

    def test_transpile_file_read_error(self):
        with self.assertRaises(SourceReadError) as cm:
            self.transpiler().transpile_file(os.path.join(self.tmpdir.name, 'Nope.java'), 'core', [])
        self.assertTrue(cm.exception.unit.endswith('Nope.java'))

    def test_write_output(self):
        transpiler = self.transpiler()
        with redirect_stdout(io.StringIO()):
            transpiler.write_output(transpiler.walk_modules())
        written = self.root / 'ts/core/src/model/User.ts'
        self.assertTrue(written.is_file())
        self.assertIn('export class User', written.read_text())

    def test_module_for_file(self):
        transpiler = self.transpiler()
        java_file = self.root / 'java/core/src/main/java/com/acme/core/model/User.java'
        self.assertEqual(transpiler.module_for_file(str(java_file)), ('core', 'com/acme/core/model/User.java'))

    def test_sibling_names(self):
        model = self.root / 'java/core/src/main/java/com/acme/core/model'
        candidates = sorted(self.root.rglob('*.java'))
        self.assertEqual(sibling_names(model / 'User.java', candidates), ['Helper'])

    def test_cli_single_file(self):
        java_file = self.root / 'java/core/src/main/java/com/acme/core/model/User.java'
        out = io.StringIO()
        with redirect_stdout(out), redirect_stderr(io.StringIO()):
            status = main([str(self.config_path), '--file', str(java_file), '--stdout'])
        self.assertEqual(status, 0)
        self.assertIn("import { Helper } from './Helper';", out.getvalue())

    def test_cli_bad_config(self):
        err = io.StringIO()
        with redirect_stderr(err):
            status = main([os.path.join(self.tmpdir.name, 'missing.yaml')])
        self.assertEqual(status, 1)
        self.assertIn('Error:', err.getvalue())


if __name__ == '__main__':
    unittest.main()
