"""
Unit tests for the transform passes and the import-driven pass selector.

The trees are built by hand so each pass is exercised in isolation.

Run with: python3 -m pytest javatots/test_transforms.py
"""

import unittest

from javatots.codegen import render_import
from javatots.config import ModuleMap, PackageMap
from javatots.errors import ConfigurationError
from javatots.imports import ModuleResolver
from javatots.parser.ast_nodes import (
    Annotation,
    BinaryExpression,
    BlockStatement,
    ClassDeclaration,
    ClassType,
    Comment,
    CompilationUnit,
    ConstructorDeclaration,
    ExplicitConstructorInvocation,
    ExpressionStatement,
    FieldAccess,
    FieldDeclaration,
    ImportDeclaration,
    Literal,
    LocalVariableDeclaration,
    MethodCall,
    MethodDeclaration,
    Modifier,
    Name,
    ObjectCreation,
    PackageDeclaration,
    Position,
    PrimitiveType,
    TypeMarker,
    VariableDeclarator,
)
from javatots.transforms import (
    BuiltinCallsPass,
    ContainersPass,
    CoreTypesPass,
    DelombokPass,
    FileInputStreamPass,
    LombokLoggingPass,
    OptionalPass,
    PassId,
    PassSelector,
    StringWriterPass,
    TransformContext,
    apply_passes,
    delombok,
    lookup,
)


def method_with(*statements):
    return MethodDeclaration('run', body=BlockStatement(list(statements)))


def unit_with(*members, annotations=None, extends=None, imports=None, package='com.acme.core.service'):
    decl = ClassDeclaration(
        'Service',
        modifiers=[Modifier.PUBLIC],
        annotations=annotations or [],
        extends=extends or [],
        members=list(members),
    )
    return CompilationUnit(
        package=PackageDeclaration(package),
        imports=imports or [],
        types=[decl],
    )


class TestCoreTypesPass(unittest.TestCase):
    """Test the scalar type renames."""

    def run_pass(self, unit, type_mappings=None):
        return CoreTypesPass(TransformContext(type_mappings or {})).run(unit)

    def test_boxed_and_primitive_types(self):
        """Test that String, int and Boolean become their TypeScript scalars."""
        unit = unit_with(
            FieldDeclaration(ClassType('String'), [VariableDeclarator('name')]),
            FieldDeclaration(PrimitiveType('int'), [VariableDeclarator('count')]),
            FieldDeclaration(ClassType('Boolean'), [VariableDeclarator('flag')]),
        )
        fields = self.run_pass(unit).types[0].members
        self.assertEqual([f.type for f in fields], [
            ClassType('string'), ClassType('number'), ClassType('boolean'),
        ])

    def test_type_arguments_are_mapped(self):
        """Test that scalar type arguments inside generics are renamed."""
        unit = unit_with(FieldDeclaration(
            ClassType('Map', [ClassType('String'), ClassType('Long')]),
            [VariableDeclarator('index')],
        ))
        field = self.run_pass(unit).types[0].members[0]
        self.assertEqual(field.type, ClassType('Map', [ClassType('string'), ClassType('number')]))

    def test_java_lang_qualified_name(self):
        """Test that java.lang.String is mapped but a foreign String is not."""
        java_lang = ClassType('String', scope=ClassType('lang', scope=ClassType('java')))
        foreign = ClassType('String', scope=ClassType('acme', scope=ClassType('com')))
        unit = unit_with(
            FieldDeclaration(java_lang, [VariableDeclarator('a')]),
            FieldDeclaration(foreign, [VariableDeclarator('b')]),
        )
        fields = self.run_pass(unit).types[0].members
        self.assertEqual(fields[0].type, ClassType('string'))
        self.assertEqual(fields[1].type.qualified_name, 'com.acme.String')

    def test_configured_mappings(self):
        """Test that typeMappings entries extend and override the built-in table."""
        unit = unit_with(
            FieldDeclaration(ClassType('BigDecimal'), [VariableDeclarator('price')]),
            FieldDeclaration(ClassType('Character'), [VariableDeclarator('initial')]),
        )
        fields = self.run_pass(unit, {'BigDecimal': 'number', 'Character': 'char'}).types[0].members
        self.assertEqual(fields[0].type, ClassType('number'))
        self.assertEqual(fields[1].type, ClassType('char'))

    def test_constructor_name_is_kept(self):
        """Test that `new String(x)` is not renamed to `new string(x)`."""
        creation = ObjectCreation(ClassType('String'), [Name('chars')])
        unit = unit_with(FieldDeclaration(ClassType('String'), [VariableDeclarator('s', initializer=creation)]))
        field = self.run_pass(unit).types[0].members[0]
        self.assertEqual(field.variables[0].initializer.type, ClassType('String'))


class TestBuiltinCallsPass(unittest.TestCase):
    """Test the rewriting of equals and System stream calls."""

    def rewrite(self, expression):
        unit = unit_with(method_with(ExpressionStatement(expression)))
        unit = BuiltinCallsPass(TransformContext()).run(unit)
        return unit.types[0].members[0].body.statements[0].expression

    def test_equals(self):
        """Test that a.equals(b) becomes a == b."""
        result = self.rewrite(MethodCall('equals', [Name('b')], target=Name('a')))
        self.assertEqual(result, BinaryExpression('==', Name('a'), Name('b')))

    def test_println(self):
        """Test that System.out.println becomes console.log."""
        result = self.rewrite(MethodCall('println', [Name('x')], target=FieldAccess(Name('System'), 'out')))
        self.assertEqual(result, MethodCall('log', [Name('x')], target=Name('console')))

    def test_err_println(self):
        result = self.rewrite(MethodCall('println', [Name('x')], target=FieldAccess(Name('System'), 'err')))
        self.assertEqual(result, MethodCall('error', [Name('x')], target=Name('console')))

    def test_print(self):
        """Test that System.out.print writes to process.stdout."""
        result = self.rewrite(MethodCall('print', [Name('x')], target=FieldAccess(Name('System'), 'out')))
        self.assertEqual(
            result,
            MethodCall('write', [Name('x')], target=FieldAccess(Name('process'), 'stdout')),
        )

    def test_other_println_untouched(self):
        """Test that println on another receiver is left alone."""
        call = MethodCall('println', [Name('x')], target=Name('writer'))
        self.assertEqual(self.rewrite(call), MethodCall('println', [Name('x')], target=Name('writer')))


class TestOptionalPass(unittest.TestCase):
    """Test the Optional marker and factory rewrites."""

    def test_type_is_marked(self):
        unit = unit_with(FieldDeclaration(ClassType('Optional', [ClassType('string')]), [VariableDeclarator('v')]))
        field = OptionalPass(TransformContext()).run(unit).types[0].members[0]
        self.assertIs(field.type.marker, TypeMarker.OR_NULL)

    def test_factories(self):
        """Test that Optional.empty() is null and Optional.of(x) is x."""
        unit = unit_with(
            FieldDeclaration(ClassType('Optional', [ClassType('string')]), [
                VariableDeclarator('a', initializer=MethodCall('empty', target=Name('Optional'))),
                VariableDeclarator('b', initializer=MethodCall('of', [Name('x')], target=Name('Optional'))),
                VariableDeclarator('c', initializer=MethodCall('ofNullable', [Name('y')], target=Name('Optional'))),
            ]),
        )
        field = OptionalPass(TransformContext()).run(unit).types[0].members[0]
        self.assertEqual(
            [v.initializer for v in field.variables],
            [Literal('null'), Name('x'), Name('y')],
        )


class TestContainersAndStreams(unittest.TestCase):
    """Test the container and stream substitutions."""

    def test_list_becomes_array(self):
        unit = unit_with(
            FieldDeclaration(ClassType('List', [ClassType('string')]), [VariableDeclarator('a')]),
            FieldDeclaration(ClassType('ArrayList', [ClassType('number')]), [VariableDeclarator('b')]),
        )
        fields = ContainersPass(TransformContext()).run(unit).types[0].members
        self.assertEqual(fields[0].type, ClassType('Array', [ClassType('string')]))
        self.assertEqual(fields[1].type, ClassType('Array', [ClassType('number')]))

    def test_file_input_stream(self):
        """Test that new FileInputStream(path) becomes Fs.createReadStream(path)."""
        local = LocalVariableDeclaration(
            ClassType('InputStream'),
            [VariableDeclarator('in', initializer=ObjectCreation(ClassType('FileInputStream'), [Name('path')]))],
        )
        unit = FileInputStreamPass(TransformContext()).run(unit_with(method_with(local)))
        local = unit.types[0].members[0].body.statements[0]
        self.assertEqual(local.type, ClassType('Readable'))
        self.assertEqual(
            local.variables[0].initializer,
            MethodCall('createReadStream', [Name('path')], target=Name('Fs')),
        )

    def test_string_writer(self):
        """Test that StringWriter becomes a Writable, constructor included."""
        local = LocalVariableDeclaration(
            ClassType('StringWriter'),
            [VariableDeclarator('out', initializer=ObjectCreation(ClassType('StringWriter')))],
        )
        unit = StringWriterPass(TransformContext()).run(unit_with(method_with(local)))
        local = unit.types[0].members[0].body.statements[0]
        self.assertEqual(local.type, ClassType('Writable'))
        self.assertEqual(local.variables[0].initializer.type, ClassType('Writable'))


class TestLombokPasses(unittest.TestCase):
    """Test the Lombok accessor synthesis and logging rewrite."""

    def point(self, annotations, extends=None):
        return ClassDeclaration(
            'Point',
            annotations=[Annotation(name) for name in annotations],
            extends=extends or [],
            members=[
                FieldDeclaration(ClassType('number'), [VariableDeclarator('x')]),
                FieldDeclaration(ClassType('number'), [VariableDeclarator('y')], modifiers=[Modifier.FINAL]),
                FieldDeclaration(ClassType('number'), [VariableDeclarator('count')], modifiers=[Modifier.STATIC]),
            ],
        )

    def test_member_order(self):
        """Test that constructors come first, then setters, then getters."""
        decl = delombok(self.point(['Getter', 'Setter', 'NoArgsConstructor', 'AllArgsConstructor']))
        names = [getattr(m, 'name', None) for m in decl.members[3:]]
        self.assertEqual(names, ['Point', 'Point', 'setX', 'getX', 'getY'])
        self.assertEqual(decl.annotations, [])

    def test_final_fields_get_no_setter(self):
        decl = delombok(self.point(['Data']))
        names = [m.name for m in decl.members if isinstance(m, MethodDeclaration)]
        self.assertEqual(names, ['setX', 'getX', 'getY'])

    def test_all_args_constructor_assigns_instance_fields(self):
        """Test that static fields are not constructor parameters."""
        decl = delombok(self.point(['AllArgsConstructor']))
        ctor = decl.members[3]
        self.assertIsInstance(ctor, ConstructorDeclaration)
        self.assertEqual([p.name for p in ctor.parameters], ['x', 'y'])
        self.assertEqual(len(ctor.body.statements), 2)

    def test_subclass_constructors_call_super(self):
        decl = delombok(self.point(['NoArgsConstructor', 'AllArgsConstructor'], extends=[ClassType('Shape')]))
        for ctor in decl.members[3:5]:
            self.assertEqual(ctor.body.statements[0], ExplicitConstructorInvocation(is_this=False))

    def test_field_level_getter(self):
        """Test that @Getter on one field only generates that accessor."""
        decl = ClassDeclaration('Box', members=[
            FieldDeclaration(ClassType('string'), [VariableDeclarator('label')], annotations=[Annotation('Getter')]),
            FieldDeclaration(ClassType('number'), [VariableDeclarator('size')]),
        ])
        result = delombok(decl)
        self.assertEqual([m.name for m in result.members if isinstance(m, MethodDeclaration)], ['getLabel'])
        self.assertEqual(result.members[0].annotations, [])

    def test_does_not_leak_between_classes(self):
        """Test that a nested class does not inherit its outer class's flags."""
        inner = ClassDeclaration('Inner', members=[
            FieldDeclaration(ClassType('string'), [VariableDeclarator('id')]),
        ])
        outer = self.point(['Getter'])
        outer.members.append(inner)
        unit = DelombokPass(TransformContext()).run(CompilationUnit(types=[outer]))
        inner = [m for m in unit.types[0].members if isinstance(m, ClassDeclaration)][0]
        self.assertEqual(len(inner.members), 1)

    def test_slf4j(self):
        """Test that @Slf4j is removed and log calls go to the console."""
        unit = unit_with(
            method_with(ExpressionStatement(MethodCall('info', [Literal('"started"')], target=Name('log')))),
            annotations=[Annotation('Slf4j')],
        )
        unit = LombokLoggingPass(TransformContext()).run(unit)
        decl = unit.types[0]
        self.assertEqual(decl.annotations, [])
        call = decl.members[0].body.statements[0].expression
        self.assertEqual(call.target, Name('console'))


class TestPassSelector(unittest.TestCase):
    """Test pass selection and import rewriting."""

    def setUp(self):
        self.resolver = ModuleResolver({
            'core': ModuleMap('core', dest_module='@acme/core', package_maps=(PackageMap('com.acme.core', 'src'),)),
        })
        self.ctx = TransformContext(file_path='Service.java')

    def select(self, unit, siblings=(), policy='wildcard'):
        selector = PassSelector(self.resolver, 'core', self.ctx, policy)
        return selector.select(unit, siblings)

    def rendered_imports(self, unit):
        return [render_import(decl) for decl in unit.imports]

    def test_lookup_prefers_class_entry(self):
        """Test that a class-specific registration beats the package-wide one."""
        self.assertIs(lookup('lombok.extern.slf4j', 'Slf4j').pass_id, PassId.LOMBOK_LOGGING)
        self.assertIs(lookup('lombok', 'Getter').pass_id, PassId.DELOMBOK)
        self.assertIsNone(lookup('java.util', 'Map').pass_id)
        self.assertIsNone(lookup('com.acme', 'Foo'))

    def test_mandatory_passes_only(self):
        passes = self.select(unit_with())
        self.assertEqual(passes, [PassId.CORE_TYPES, PassId.BUILTIN_CALLS])

    def test_selection_and_import_rewrite(self):
        """Test pass order, emitted imports, resolved imports and the wildcard fallback."""
        unit = unit_with(
            FieldDeclaration(ClassType('Helper'), [VariableDeclarator('helper')]),
            imports=[
                ImportDeclaration('lombok.Getter'),
                ImportDeclaration('java.util.List'),
                ImportDeclaration('java.util.Optional'),
                ImportDeclaration('java.util.Map'),
                ImportDeclaration('java.io.FileInputStream'),
                ImportDeclaration('java.io.InputStream'),
                ImportDeclaration('com.acme.core.model.User'),
                ImportDeclaration('org.unknown.Thing'),
            ],
        )
        passes = self.select(unit, siblings=['Helper', 'Unused'])
        self.assertEqual(passes, [
            PassId.CORE_TYPES,
            PassId.BUILTIN_CALLS,
            PassId.DELOMBOK,
            PassId.CONTAINERS,
            PassId.OPTIONAL,
            PassId.FILE_INPUT_STREAM,
        ])
        self.assertEqual(self.rendered_imports(unit), [
            "import * as Fs from 'fs';",
            "import { Readable } from 'stream';",
            "import { User } from '../model/User';",
            "import * as Thing from 'org/unknown';",
            "import { Helper } from './Helper';",
        ])
        self.assertEqual(self.ctx.diagnostics.codes(), ['W001'])

    def test_package_wildcard_import(self):
        """Test that `import lombok.*;` enqueues delombok and is dropped."""
        unit = unit_with(imports=[ImportDeclaration('lombok', is_asterisk=True)])
        passes = self.select(unit)
        self.assertIn(PassId.DELOMBOK, passes)
        self.assertNotIn(PassId.LOMBOK_LOGGING, passes)
        self.assertEqual(unit.imports, [])

    def test_static_import(self):
        """Test that a static import resolves the declaring class's module."""
        unit = unit_with(imports=[ImportDeclaration('com.acme.core.util.Strings.isBlank', is_static=True)])
        self.select(unit)
        self.assertEqual(self.rendered_imports(unit), ["import { isBlank } from '../util/Strings';"])

    def test_unresolved_import_fails_when_configured(self):
        unit = unit_with(imports=[ImportDeclaration('org.unknown.Thing')])
        with self.assertRaises(ConfigurationError):
            self.select(unit, policy='fail')

    def test_sibling_rules(self):
        """Test that siblings are imported only when used and not declared or imported already."""
        unit = unit_with(
            FieldDeclaration(ClassType('Helper'), [VariableDeclarator('a')]),
            FieldDeclaration(ClassType('Service'), [VariableDeclarator('b')]),
            FieldDeclaration(ClassType('Repo'), [VariableDeclarator('c')]),
            imports=[ImportDeclaration('com.acme.core.service.Repo')],
        )
        self.select(unit, siblings=['Helper', 'Service', 'Repo', 'Unused'])
        self.assertEqual(self.rendered_imports(unit), [
            "import { Repo } from './Repo';",
            "import { Helper } from './Helper';",
        ])

    def test_stream_imports_emitted_once_per_pass(self):
        """Test that two triggers of one pass contribute its imports once."""
        unit = unit_with(imports=[
            ImportDeclaration('java.io.FileInputStream'),
            ImportDeclaration('java.io.InputStream'),
            ImportDeclaration('java.io.StringWriter'),
        ])
        self.select(unit)
        self.assertEqual(self.rendered_imports(unit), [
            "import * as Fs from 'fs';",
            "import { Readable } from 'stream';",
            "import { Writable } from 'stream';",
        ])

    def test_consumed_import_comments_kept(self):
        """Test that comments of consumed or duplicate imports move to the unit."""
        note = Comment(' cache type', position=Position(2, 1))
        again = Comment(' again', position=Position(5, 1))
        unit = unit_with(imports=[
            ImportDeclaration('java.util.List', comment=note),
            ImportDeclaration('com.acme.core.model.User'),
            ImportDeclaration('com.acme.core.model.User', comment=again),
        ])
        self.select(unit)
        self.assertEqual(self.rendered_imports(unit), ["import { User } from '../model/User';"])
        self.assertEqual(unit.orphan_comments, [note, again])
        self.assertIsNone(unit.imports[0].comment)

    def test_apply_passes_in_order(self):
        """Test the mandatory passes running before an import-triggered one."""
        unit = unit_with(
            FieldDeclaration(ClassType('List', [ClassType('String')]), [VariableDeclarator('names')]),
            imports=[ImportDeclaration('java.util.List')],
        )
        passes = self.select(unit)
        unit = apply_passes(unit, passes, self.ctx)
        field = unit.types[0].members[0]
        self.assertEqual(field.type, ClassType('Array', [ClassType('string')]))


if __name__ == '__main__':
    unittest.main()
