from __future__ import annotations

import time

import pytest

from sizeanalyzer.parsers.base import GradleParseError
from sizeanalyzer.parsers.gradle.grammar import GRADLE_PARSER
from sizeanalyzer.parsers.gradle.nodes import (
    Assignment,
    Block,
    Call,
    Literal,
    Other,
    PropertyAccess,
    VariableRef,
)
from sizeanalyzer.parsers.gradle.text import node_text


def _single_statement(source: str):
    script = GRADLE_PARSER.parse(source)
    assert isinstance(script, Block)
    assert len(script.statements) == 1
    return script.statements[0]


def test_command_expression_becomes_call() -> None:
    source = "minSdkVersion 15"
    call = _single_statement(source)

    assert isinstance(call, Call)
    assert call.name == "minSdkVersion"
    assert call.receiver is None
    assert len(call.arguments.items) == 1
    assert isinstance(call.arguments.items[0], Literal)
    assert call.arguments.items[0].kind == "number"
    assert node_text(call.arguments, source) == "15"


def test_dotted_command_keeps_receiver_chain() -> None:
    call = _single_statement("android.defaultConfig.minSdkVersion 15")

    assert isinstance(call, Call)
    assert call.name == "minSdkVersion"
    receiver = call.receiver
    assert isinstance(receiver, PropertyAccess)
    assert receiver.name == "defaultConfig"
    assert receiver.receiver == VariableRef("android", receiver.receiver.span)


def test_closure_call_is_closure_container() -> None:
    source = "android {\n    compileSdkVersion 28\n}\n"
    call = _single_statement(source)

    assert isinstance(call, Call)
    assert call.name == "android"
    assert call.is_closure_container
    body = call.arguments.items[0]
    assert isinstance(body, Block)
    assert [statement.name for statement in body.statements] == ["compileSdkVersion"]


def test_call_with_arguments_and_trailing_closure_is_not_container() -> None:
    call = _single_statement("configure(project) {\n    version = '1.0'\n}")

    assert isinstance(call, Call)
    assert len(call.arguments.items) == 2
    assert not call.is_closure_container


def test_named_arguments_are_collected() -> None:
    source = "apply plugin: 'com.android.application'"
    call = _single_statement(source)

    assert call.name == "apply"
    assert call.arguments.items == ()
    assert [named.key for named in call.arguments.named] == ["plugin"]
    assert node_text(call.arguments.named[0].value, source) == "'com.android.application'"


def test_multiple_command_arguments_keep_source_text() -> None:
    source = "proguardFiles getDefaultProguardFile('proguard-android.txt'), 'proguard-rules.pro'"
    call = _single_statement(source)

    assert call.name == "proguardFiles"
    assert len(call.arguments.items) == 2
    assert isinstance(call.arguments.items[0], Call)
    assert node_text(call.arguments, source) == (
        "getDefaultProguardFile('proguard-android.txt'), 'proguard-rules.pro'"
    )


def test_command_chain_links_calls_through_receivers() -> None:
    call = _single_statement("id 'com.android.application' version '7.0.0' apply false")

    assert call.name == "apply"
    assert call.receiver.name == "version"
    assert call.receiver.receiver.name == "id"
    assert call.receiver.receiver.receiver is None


def test_assignment_inside_closure() -> None:
    source = "defaultConfig {\n    minSdkVersion = 21\n}"
    call = _single_statement(source)
    assignment = call.arguments.items[0].statements[0]

    assert isinstance(assignment, Assignment)
    assert isinstance(assignment.target, VariableRef)
    assert assignment.target.name == "minSdkVersion"
    assert node_text(assignment.value, source) == "21"


def test_declaration_with_value_is_assignment() -> None:
    assignment = _single_statement('def appVersion = "1.0"')

    assert isinstance(assignment, Assignment)
    assert assignment.target.name == "appVersion"
    assert isinstance(assignment.value, Literal)


def test_method_definition_body_is_not_exposed() -> None:
    node = _single_statement("def helper(String name) {\n    minSdkVersion 99\n}")

    assert isinstance(node, Other)
    assert node.kind == "method_definition"
    assert node.children == ()


def test_interpolated_string_is_not_constant() -> None:
    plain = _single_statement('versionName "1.0"').arguments.items[0]
    template = _single_statement('versionName "1.${patch}"').arguments.items[0]
    single = _single_statement("versionName '1.$patch'").arguments.items[0]

    assert plain.is_constant
    assert not template.is_constant
    assert single.is_constant


def test_string_span_includes_quotes() -> None:
    source = 'applicationId "com.example.app"'
    call = _single_statement(source)

    assert node_text(call.arguments.items[0], source) == '"com.example.app"'


def test_leading_dot_continues_previous_line() -> None:
    call = _single_statement("tasks.withType(JavaCompile)\n    .configureEach {\n    }\n")

    assert call.name == "configureEach"
    assert isinstance(call.receiver, Call)
    assert call.receiver.name == "withType"


def test_newlines_inside_parentheses_are_ignored() -> None:
    call = _single_statement("implementation(\n    'a:b:1.0',\n    'c:d:2.0'\n)")

    assert call.name == "implementation"
    assert len(call.arguments.items) == 2


def test_comments_and_separators() -> None:
    source = """
// leading comment
buildscript { /* inline */ repositories { google(); mavenCentral() } }

/*
 * block comment
 */
allprojects {
    repositories {
        google() // trailing comment
    }
}
"""
    script = GRADLE_PARSER.parse(source)

    assert [statement.name for statement in script.statements] == [
        "buildscript",
        "allprojects",
    ]


def test_control_flow_and_imports_parse() -> None:
    source = """
import java.util.regex.*
import org.gradle.api.Project

def props = new Properties()
if (project.hasProperty('release')) {
    version = '1.0'
} else {
    version = '1.0-SNAPSHOT'
}
for (flavor in ['free', 'paid']) {
    println flavor
}
ext.isCi = System.getenv('CI') ?: false
"""
    script = GRADLE_PARSER.parse(source)

    assert len(script.statements) == 6


def test_empty_script() -> None:
    script = GRADLE_PARSER.parse("")

    assert script.statements == ()


def test_unbalanced_braces_raise_parse_error() -> None:
    with pytest.raises(GradleParseError):
        GRADLE_PARSER.parse("android {\n    compileSdkVersion 28\n")


def test_parse_error_reports_line() -> None:
    with pytest.raises(GradleParseError) as exc_info:
        GRADLE_PARSER.parse("android {\n    minSdkVersion 15 )\n}\n")

    assert exc_info.value.line == 2


def test_typed_declarations_are_assignments() -> None:
    source = """
String flavor = 'free'
List<String> abis = ['x86', 'armeabi-v7a']
Map<String, Integer> codes = [:]
int[] levels = [1, 2]
"""
    script = GRADLE_PARSER.parse(source)

    assert [statement.target.name for statement in script.statements] == [
        "flavor",
        "abis",
        "codes",
        "levels",
    ]
    assert all(isinstance(statement, Assignment) for statement in script.statements)


def test_typed_method_definition() -> None:
    node = _single_statement("String versionTag(int major, List<String> parts) {\n    return parts\n}")

    assert isinstance(node, Other)
    assert node.kind == "method_definition"


def test_cast_expressions() -> None:
    primitive = _single_statement("def code = (int) versionName.length()")
    generic = _single_statement("def names = (List<String>) project.names")
    summed = _single_statement("versionCode major * 100 + (int) minor")

    assert isinstance(primitive.value, Other)
    assert primitive.value.kind == "cast_expression"
    assert isinstance(primitive.value.children[0], Call)
    assert generic.value.kind == "cast_expression"
    assert summed.name == "versionCode"
    assert summed.arguments.items[0].kind == "additive"


def test_parenthesized_value_is_not_a_cast() -> None:
    assignment = _single_statement("def half = (total) / 2")

    assert assignment.value.kind == "multiplicative"
    assert assignment.value.children[0] == VariableRef("total", assignment.value.children[0].span)


def test_switch_statement() -> None:
    source = """
switch (flavor) {
    case 'free':
        minSdkVersion 21
        break
    case ~/paid.*/:
        minSdkVersion 23
        break
    default:
        minSdkVersion 19
}
"""
    node = _single_statement(source)

    assert isinstance(node, Other)
    assert node.kind == "switch_statement"
    assert [child.kind for child in node.children[1:]] == ["switch_case"] * 3
    assert [statement.name for statement in node.children[1].children if isinstance(statement, Call)] == [
        "minSdkVersion"
    ]


def test_slashy_strings() -> None:
    plain = _single_statement(r"def pattern = /release-\d+/")
    template = _single_statement("def tag = /v$version/")
    matched = _single_statement("def isRelease = name ==~ /release.*/")

    assert isinstance(plain.value, Literal)
    assert plain.value.is_constant
    assert not template.value.is_constant
    assert matched.value.kind == "equality"


def test_division_is_not_a_slashy_string() -> None:
    assignment = _single_statement("def quarter = total / 2 / 2")

    assert assignment.value.kind == "multiplicative"
    assert len(assignment.value.children) == 3


def test_annotations_and_class_definitions() -> None:
    source = """
import groovy.transform.Field

@groovy.transform.CompileStatic
class VersionHelper extends BaseHelper implements Serializable {
    String name = 'helper'

    int code() {
        return 1
    }
}

@Field String flavor = 'free'
@SuppressWarnings(value = 'unused')
def legacy = true
"""
    script = GRADLE_PARSER.parse(source)

    assert len(script.statements) == 4
    assert script.statements[1].kind == "class_definition"
    assert script.statements[1].children == ()
    assert script.statements[2].target.name == "flavor"
    assert script.statements[3].target.name == "legacy"


def test_left_shift_task_definition() -> None:
    call = _single_statement("task hello << {\n    println 'Hello'\n}")

    assert call.name == "task"
    argument = call.arguments.items[0]
    assert isinstance(argument, Other)
    assert argument.kind == "shift_expr"
    assert isinstance(argument.children[1], Block)


def test_bitwise_operators() -> None:
    assignment = _single_statement("def flags = FLAG_A | FLAG_B & ~mask ^ 0x1 >> 2")

    assert assignment.value.kind == "bit_or"
    assert assignment.value.children[1].kind == "bit_xor"


def test_method_pointer() -> None:
    assignment = _single_statement("def printer = this.&println")

    assert assignment.value.kind == "method_pointer"


def test_multiple_assignment_walks_only_the_value() -> None:
    node = _single_statement("def (major, minor) = versionName.tokenize('.')")

    assert isinstance(node, Other)
    assert node.kind == "multiple_assignment"
    assert len(node.children) == 1
    assert node.children[0].name == "tokenize"


def test_closure_parameters_are_not_statements() -> None:
    source = """
android.applicationVariants.all { variant ->
    variant.outputs.each { output -> println output }
}
ext.codes.each { String key,
    int value -> println key }
"""
    script = GRADLE_PARSER.parse(source)

    variants = script.statements[0]
    assert variants.name == "all"
    assert variants.is_closure_container
    body = variants.arguments.items[0]
    assert [statement.name for statement in body.statements] == ["each"]
    codes = script.statements[1]
    assert [statement.name for statement in codes.arguments.items[0].statements] == ["println"]


def test_keyword_after_dot_is_a_property() -> None:
    assignment = _single_statement("def kind = project.class.name")

    assert assignment.value.name == "name"
    assert assignment.value.receiver.name == "class"


def test_large_script_parses_quickly() -> None:
    module = """apply plugin: 'com.android.application'

android {
    compileSdkVersion 28
    defaultConfig {
        applicationId "com.example.app"
        minSdkVersion 21
        targetSdkVersion 28
        versionCode 1
        versionName "1.${patch}"
    }
    buildTypes {
        release {
            minifyEnabled true
            proguardFiles getDefaultProguardFile('proguard-android.txt'), 'proguard-rules.pro'
        }
    }
}
dependencies {
    implementation fileTree(dir: 'libs', include: ['*.jar'])
    implementation 'androidx.appcompat:appcompat:1.0.2'
}
"""
    source = module * 20
    assert source.count("\n") >= 400

    started = time.perf_counter()
    script = GRADLE_PARSER.parse(source)
    elapsed = time.perf_counter() - started

    assert len(script.statements) == 60
    assert elapsed < 2.0
