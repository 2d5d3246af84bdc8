"""
ArgumentParser behavioral tests (registration, tokenizer, validation, access).

Scope
- Program information and argv[0] handling.
- Positional policy: defaults, bounds, the "--" separator, interleaving.
- Option registration rules: names, duplicates, overload forms.
- Token forms: short, grouped, long, inline values, pulled values.
- Whole-parse validation: required options, positional minimum, XOR groups.
- Typed access and bulk setters.

Conventions
- Test method names follow CamelCase per project convention.
- Every parse starts from argv[0] == "app" unless program naming is under test.
"""

import copy
import os
import unittest
from unittest import TestCase

from arglet import ArgumentParser, UNLIMITED_POSITIONALS
from arglet.faults import (
    FaultCode,
    UsageError,
    ParsingError,
    EmptyArgumentsError,
    EmptyNamesError,
    MalformedNameError,
    DuplicatedNameError,
    UnknownNameError,
    ArityMismatchError,
    AppendingMismatchError,
    XorGroupError,
    PositionalBoundsError,
    MultipleValuesError,
    UnsupportedTypeError,
    UnrecognizedArgumentError,
    UnknownSwitchError,
    MalformedGroupError,
    InterleavedOptionError,
    TooManyPositionalsError,
    MissingPositionalsError,
    ValueCountError,
    InvalidChoiceError,
    DuplicatedSwitchError,
    MissingRequiredError,
    ConflictingOptionsError,
    UncastableValueError,
    UnparsedOptionError,
)


class TestProgramInfo(TestCase):
    def testEmptyArgvRejected(self):
        with self.assertRaises(EmptyArgumentsError):
            ArgumentParser().parse([])

    def testParseProgramOnly(self):
        parser = ArgumentParser()
        parser.parse(["app"])
        self.assertEqual(parser.program_name, "app")

    def testHelpInfo(self):
        parser = ArgumentParser()
        parser.set_help_info("pre", "post")
        self.assertEqual(parser.help_preamble, "pre")
        self.assertEqual(parser.help_epilog, "post")

    def testProgramNameAndVersion(self):
        parser = ArgumentParser()
        parser.set_program_info("app", "1.1")
        self.assertEqual(parser.program_name, "app")
        self.assertEqual(parser.program_version, "1.1")

    def testConstructorProgramInfo(self):
        parser = ArgumentParser("tool", "2.0", preamble="pre", epilog="post")
        parser.parse(["/usr/bin/other"])
        self.assertEqual(parser.program_name, "tool")
        self.assertEqual(parser.program_version, "2.0")
        self.assertEqual(parser.help_preamble, "pre")

    def testProgramNameFromPath(self):
        parser = ArgumentParser()
        parser.parse([os.sep.join(("", "usr", "bin", "myprogram"))])
        self.assertEqual(parser.program_name, "myprogram")

    def testProgramNameFromDirectoryPath(self):
        path = os.sep.join(("", "usr", "bin", ""))
        parser = ArgumentParser()
        parser.parse([path])
        self.assertEqual(parser.program_name, path)

    def testProgramNameSetOnlyOnce(self):
        parser = ArgumentParser()
        parser.parse(["first"])
        parser.parse(["second"])
        self.assertEqual(parser.program_name, "first")

    def testParserIsNotCopyable(self):
        parser = ArgumentParser()
        with self.assertRaises(TypeError):
            copy.copy(parser)
        with self.assertRaises(TypeError):
            copy.deepcopy(parser)


class TestPositionals(TestCase):
    def testNoPositionalsByDefault(self):
        with self.assertRaises(TooManyPositionalsError):
            ArgumentParser().parse(["app", "p1"])

    def testAllowedPositionals(self):
        parser = ArgumentParser()
        parser.set_allowed_positionals(1)
        parser.parse(["app", "p"])
        parser.reset()
        with self.assertRaises(TooManyPositionalsError):
            parser.parse(["app", "p1", "p2"])

    def testRequiredHigherThanAllowed(self):
        with self.assertRaises(PositionalBoundsError):
            ArgumentParser().set_required_positionals(1)

    def testAllowedLowerThanRequired(self):
        parser = ArgumentParser()
        parser.set_allowed_positionals(2)
        parser.set_required_positionals(2)
        with self.assertRaises(PositionalBoundsError):
            parser.set_allowed_positionals(1)

    def testRequiredPositionals(self):
        parser = ArgumentParser()
        parser.set_allowed_positionals(1)
        parser.set_required_positionals(1)
        parser.parse(["a", "p1"])
        parser.reset()
        with self.assertRaises(TooManyPositionalsError):
            parser.parse(["a", "p1", "p2"])
        parser.reset()
        with self.assertRaises(MissingPositionalsError):
            parser.parse(["a"])

    def testUnlimitedPositionals(self):
        parser = ArgumentParser()
        parser.add_flag("-s")
        parser.set_allowed_positionals(UNLIMITED_POSITIONALS)
        parser.parse(["app"] + ["p1"] * 11)
        self.assertEqual(len(parser.positionals), 11)

    def testCollectPositionals(self):
        parser = ArgumentParser()
        parser.add_flag("-s")
        parser.set_allowed_positionals(2)
        parser.parse(["app", "p1"])
        self.assertTrue(parser.has_positionals())
        self.assertEqual(parser.positionals, ["p1"])
        parser.reset()
        parser.parse(["app", "-s", "p1"])
        self.assertTrue(parser.has_positionals())
        parser.reset()
        self.assertFalse(parser.has_positionals())
        parser.parse(["app", "p1", "p2"])
        self.assertEqual(parser.positionals, ["p1", "p2"])

    def testSeparator(self):
        parser = ArgumentParser()
        parser.add_flag("-s")
        parser.set_allowed_positionals(UNLIMITED_POSITIONALS)
        parser.parse(["app", "p1", "--", "-p"])
        self.assertEqual(parser.positionals, ["p1", "-p"])
        self.assertFalse(parser.is_parsed("s"))

    def testSecondSeparatorIsPositional(self):
        parser = ArgumentParser()
        parser.set_allowed_positionals(3)
        parser.parse(["app", "p1", "--", "-p", "--"])
        self.assertEqual(parser.positionals, ["p1", "-p", "--"])

    def testOptionAfterPositional(self):
        parser = ArgumentParser()
        parser.add_flag("-s")
        parser.set_allowed_positionals(2)
        with self.assertRaises(InterleavedOptionError) as context:
            parser.parse(["app", "p1", "-s"])
        self.assertEqual(context.exception.options["index"], 2)

    def testPositionalsAreCopies(self):
        parser = ArgumentParser()
        parser.set_allowed_positionals(1)
        parser.parse(["app", "p1"])
        parser.positionals.append("x")
        self.assertEqual(parser.positionals, ["p1"])

    def testPositionalHelp(self):
        parser = ArgumentParser()
        parser.set_positional_help("abc", "def")
        self.assertEqual(parser.positional_help, "abc")
        self.assertEqual(parser.positional_metavar, "def")


class TestRegistration(TestCase):
    def testOptionNaming(self):
        parser = ArgumentParser()
        for names in ([""], ["0"], ["#"], ["a"], ["---a"], ["-0"], ["-#"], ["--a#"], ["--g", "--h", "--i"],
                      ["--_"], ["-a,-b"], ["-aa"], ["a1"], ["-d", "--d"], ["-e,--d"]):
            with self.subTest(names=names):
                with self.assertRaises(UsageError):
                    parser.add_flag(*names, help="illegal")
        parser.add_flag("-x", "-y", "-z", help="multiple names")
        parser.add_flag("-c", "-c", help="repeated name")
        parser.add_flag("-a", "--a1", help="legal")
        parser.add_flag("--a_", help="legal")
        parser.add_flag("-b", "--b-b", help="legal")
        self.assertTrue(all(map(parser.has_option, ("x", "y", "z", "c", "a", "a1", "a_", "b", "b-b"))))
        self.assertFalse(parser.has_option("d"))

    def testFailedRegistrationLeavesNoTrace(self):
        parser = ArgumentParser()
        with self.assertRaises(MalformedNameError):
            parser.add_flag("-d", "--d")
        self.assertFalse(parser.has_option("d"))
        self.assertEqual(parser.options, [])

    def testNamesRequired(self):
        with self.assertRaises(EmptyNamesError):
            ArgumentParser().add_option()

    def testDuplicatedAlias(self):
        parser = ArgumentParser()
        parser.add_flag("-b", "--both")
        with self.assertRaises(DuplicatedNameError) as context:
            parser.add_option("--both")
        self.assertEqual(context.exception.code, FaultCode.DUPLICATED_NAME)
        with self.assertRaises(DuplicatedNameError):
            parser.add_option("-x", "-b")
        self.assertFalse(parser.has_option("x"))

    def testOverloadForms(self):
        parser = ArgumentParser()
        parser.add_option("--aa", help="help")
        parser.add_option("--cc", help="help", metavar="META")
        option = parser.add_option("--dd", help="help", metavar="META", default="DEFAULT")
        self.assertEqual(option.nargs, 1)
        self.assertEqual(option.metavars, ("META",))
        self.assertEqual(option.defaults, ("DEFAULT",))
        self.assertEqual(parser.get("dd"), "DEFAULT")

    def testShorthandsOnlyForSingleArgument(self):
        parser = ArgumentParser()
        with self.assertRaises(ArityMismatchError):
            parser.add_option("--xx", nargs=2, metavar="X")
        with self.assertRaises(ArityMismatchError):
            parser.add_option("--yy", default="1", defaults=("2",))

    def testHasOptionLookupForms(self):
        parser = ArgumentParser()
        parser.add_flag("-b", "--both")
        for name in ("b", "-b", "both", "--both"):
            with self.subTest(name=name):
                self.assertTrue(parser.has_option(name))
        with self.assertRaises(MalformedNameError):
            parser.has_option("-")

    def testRepr(self):
        parser = ArgumentParser("app", "1.0")
        self.assertTrue(repr(parser).startswith("argument-parser(program_name='app', program_version='1.0'"))


class TestTokens(TestCase):
    def testSimpleFlags(self):
        parser = ArgumentParser()
        parser.add_flag("--true", help="desc")
        parser.add_flag("--false", help="desc")
        parser.parse(["app", "--true"])
        self.assertTrue(parser.is_parsed("true"))
        self.assertFalse(parser.is_parsed("false"))
        self.assertIs(parser.get("true", bool), True)
        self.assertIs(parser.get("false", bool), False)

    def testGroupedFlags(self):
        parser = ArgumentParser()
        for name in ("--true", "--false", "-a", "-b", "-c"):
            parser.add_flag(name, help="desc")
        parser.parse(["app", "-abc", "--true"])
        for name in ("a", "b", "c", "true"):
            self.assertTrue(parser.get(name, bool))
        self.assertFalse(parser.get("false", bool))
        parser.reset()
        parser.parse(["app", "-cab"])
        for name in ("a", "b", "c"):
            self.assertTrue(parser.get(name, bool))
        self.assertFalse(parser.get("true", bool))

    def testGroupWithNonLetter(self):
        parser = ArgumentParser()
        parser.add_flag("-a")
        parser.add_flag("-b")
        with self.assertRaises(MalformedGroupError):
            parser.parse(["app", "-ab1"])

    def testGroupWithUnknownFlag(self):
        parser = ArgumentParser()
        parser.add_flag("-a")
        with self.assertRaises(UnknownSwitchError):
            parser.parse(["app", "-ax"])

    def testGroupWithValueOption(self):
        parser = ArgumentParser()
        parser.add_flag("-a")
        parser.add_option("-b")
        with self.assertRaises(ValueCountError):
            parser.parse(["app", "-ab"])

    def testIllegalTokens(self):
        parser = ArgumentParser()
        parser.add_flag("-a", "--a1", help="legal")
        parser.add_flag("--a_", help="legal")
        parser.parse(["app"])
        for argv in (["app", "positional", "0"], ["app", "-0"], ["app", "-_a"], ["app", "-_"], ["app", "-"],
                     ["app", "---"], ["app", ""], ["app", "-u"]):
            parser.reset()
            with self.subTest(argv=argv):
                with self.assertRaises(ParsingError):
                    parser.parse(argv)
        for argv in (["app", "-a"], ["app", "--a1"], ["app", "--a_"]):
            parser.reset()
            with self.subTest(argv=argv):
                parser.parse(argv)

    def testUnrecognizedTokenKinds(self):
        parser = ArgumentParser()
        for token in ("-", "---", "-0", ""):
            parser.reset()
            with self.subTest(token=token):
                with self.assertRaises(UnrecognizedArgumentError) as context:
                    parser.parse(["app", token])
                self.assertEqual(context.exception.code, FaultCode.UNRECOGNIZED_ARGUMENT)

    def testUnknownSwitchSuggestions(self):
        parser = ArgumentParser()
        parser.add_option("--threads")
        with self.assertRaises(UnknownSwitchError) as context:
            parser.parse(["app", "--threds=4"])
        self.assertEqual(context.exception.options["suggestions"], ["--threads"])
        self.assertIn("--threads", context.exception.hint)

    def testValueForms(self):
        parser = ArgumentParser()
        parser.add_flag("-s", help="short")
        parser.add_flag("-b", "--both", help="both")
        parser.add_flag("--long", help="long")
        parser.add_option("-d", "--def", help="def", metavar="DEF", default="-1")
        parser.add_option("-n", "--nodef", help="nodef", metavar="NODEF", default="ad")
        parser.add_option("--no_default", help="def", metavar="DEF")

        parser.parse(["app", "-s", "--both", "--long"])
        for name in ("both", "b", "long", "s", "--long", "-s"):
            self.assertTrue(parser.is_parsed(name))
        self.assertFalse(parser.is_parsed("no_default"))
        with self.assertRaises(UnparsedOptionError):
            parser.get("no_default")
        parser.reset()

        parser.parse(["app", "--def=11"])
        self.assertTrue(parser.is_parsed("def"))
        for name in ("def", "d", "--def", "-d"):
            self.assertEqual(parser.get(name, int), 11)
        parser.reset()

        parser.parse(["app", "--nodef="])
        self.assertEqual(parser.get("nodef"), "")
        parser.reset()

        parser.parse(["app", "-d/ad"])
        self.assertEqual(parser.get("d"), "/ad")
        parser.reset()

        parser.parse(["app", "-d=5"])
        self.assertEqual(parser.get("d", int), 5)
        parser.reset()

        with self.assertRaises(DuplicatedSwitchError):
            parser.parse(["app", "-d", "1", "-d", "2"])
        with self.assertRaises(DuplicatedSwitchError):
            parser.parse(["app", "--def", "1", "-d", "2"])

    def testMainLikeInput(self):
        parser = ArgumentParser()
        parser.add_flag("-f", help="false")
        parser.add_flag("-s", help="short")
        parser.add_flag("-b", "--both", help="both")
        parser.add_option("--long", help="long")
        parser.set_allowed_positionals(2)
        parser.parse(["app", "-s", "--long", "value", "--both", "positional"])
        for name in ("both", "b", "long", "s", "--long", "-s"):
            self.assertTrue(parser.is_parsed(name))
        self.assertFalse(parser.is_parsed("-f"))
        self.assertEqual(parser.get("long"), "value")
        self.assertEqual(parser.positionals, ["positional"])

    def testValuesPulledGreedily(self):
        parser = ArgumentParser()
        parser.add_flag("-s")
        parser.add_option("--long")
        parser.parse(["app", "--long", "-s"])
        self.assertEqual(parser.get("long"), "-s")
        self.assertFalse(parser.is_parsed("s"))

    def testMissingValueAtEnd(self):
        parser = ArgumentParser()
        parser.add_option("--multi", nargs=3)
        with self.assertRaises(ValueCountError) as context:
            parser.parse(["app", "--multi", "a", "b"])
        self.assertIn("expects 3 arguments, but 0 were given", str(context.exception))

    def testInlineValueCountsTowardsArity(self):
        parser = ArgumentParser()
        parser.add_option("--all", nargs=2)
        parser.parse(["app", "--all=a", "b"])
        self.assertEqual(parser.get_many("all"), ["a", "b"])

    def testEmptyValueToken(self):
        parser = ArgumentParser()
        parser.add_option("-b")
        parser.parse(["app", "-b", ""])
        self.assertEqual(parser.get("b"), "")
        with self.assertRaises(UncastableValueError):
            parser.get("b", bool)


class TestValues(TestCase):
    def testTypedValuesAndDefaults(self):
        parser = ArgumentParser()
        for name, default in (("--true", "false"), ("--false", "false"), ("--int1", "1"), ("--int2", ""),
                              ("--float1", "3.1"), ("--float2", ""), ("--double", ""), ("--string", "mydef")):
            parser.add_option(name, help="desc", metavar="ARG", default=default)

        self.assertEqual(parser.get("int1", int), 1)
        self.assertAlmostEqual(parser.get("float1", float), 3.1)
        self.assertEqual(parser.get("string"), "mydef")

        parser.parse(["app", "--int1=8", "--int2=1.9", "--float1", "8", "--float2=2.9", "--double=8.9",
                      "--string=hallo", "--true=on"])
        for name in ("int1", "int2", "float1", "float2", "double", "string", "true"):
            self.assertTrue(parser.is_parsed(name))
        self.assertFalse(parser.is_parsed("false"))
        self.assertEqual(parser.get("int1", int), 8)
        with self.assertRaises(UncastableValueError):
            parser.get("int2", int)
        self.assertEqual(parser.get("float1", float), 8.0)
        self.assertAlmostEqual(parser.get("float2", float), 2.9)
        self.assertAlmostEqual(parser.get("double", float), 8.9)
        self.assertEqual(parser.get("string", str), "hallo")
        self.assertIs(parser.get("true", bool), True)
        self.assertIs(parser.get("false", bool), False)

    def testBooleanWords(self):
        parser = ArgumentParser()
        parser.add_option("-b")
        for word, expected in (("on", True), ("1", True), ("trUe", True), ("YEs", True),
                               ("off", False), ("0", False), ("faLSE", False), ("No", False)):
            parser.reset()
            with self.subTest(word=word):
                parser.parse(["app", "-b", word])
                self.assertIs(parser.get("b", bool), expected)

    def testInvalidBooleanWords(self):
        parser = ArgumentParser()
        parser.add_option("-b")
        for word in ("falsch", "2", "onn", ""):
            parser.reset()
            with self.subTest(word=word):
                parser.parse(["app", "-b", word])
                with self.assertRaises(ParsingError):
                    parser.get("b", bool)

    def testChoiceOption(self):
        parser = ArgumentParser()
        parser.add_option("-c", "--choice", nargs=1, choices=[("a", "b")])
        with self.assertRaises(ArityMismatchError):
            parser.add_option("-d", "--def", nargs=1, choices=[("a", "b"), ("a", "b")])
        parser.add_option("--twos", nargs=2, choices=[("a", "b"), ("a", "b")])
        for argv in (["app", "--choice", "a"], ["app", "--choice", "b"], ["app", "-c", "b"],
                     ["app", "--twos", "b", "a"]):
            parser.reset()
            parser.parse(argv)
        for argv in (["app", "--choice", "c"], ["app", "-c", "c"], ["app", "--twos", "a", "c"]):
            parser.reset()
            with self.assertRaises(InvalidChoiceError):
                parser.parse(argv)

    def testMultiArgumentOptions(self):
        parser = ArgumentParser()
        parser.add_option("--aa", nargs=2)
        parser.add_option("--bb", nargs=2, help="help")
        parser.add_option("--cc", nargs=2, help="help", metavars=("X", "Y"))
        with self.assertRaises(ArityMismatchError):
            parser.add_option("--ee", nargs=2, help="help", metavars=("X",))
        parser.add_option("--dd", nargs=2, help="help", metavars=("X", "Y"), defaults=("2", "3"))
        parser.add_option("--ii", nargs=2, help="help", defaults=("2", "3"))
        with self.assertRaises(UsageError):
            parser.add_option("--jj", nargs=2, help="help", defaults=("a", "c"), choices=[("a", "b"), ("a", "b")])
        with self.assertRaises(UsageError):
            parser.add_option("", nargs=2)
        parser.add_option("--multi", nargs=3)
        parser.add_option("--int", nargs=2, help="help", defaults=("5", "6"))
        parser.add_option("--float", nargs=2)

        self.assertFalse(parser.is_parsed("multi"))
        with self.assertRaises(MultipleValuesError):
            parser.get("int")
        with self.assertRaises(UnparsedOptionError):
            parser.get_many("multi")
        self.assertEqual(parser.get_many("int"), ["5", "6"])
        self.assertEqual(parser.get_many("int", int), [5, 6])

        parser.parse(["app", "--multi", "a", "b", "c", "--int", "1", "2", "--float", "1.1", "2.2"])
        self.assertTrue(parser.is_parsed("multi"))
        self.assertTrue(parser.is_parsed("int"))
        self.assertTrue(parser.is_parsed("float"))
        with self.assertRaises(MultipleValuesError):
            parser.get("multi")
        self.assertEqual(parser.get_many("multi"), ["a", "b", "c"])
        self.assertEqual(parser.get_many("int", int), [1, 2])
        first, second = parser.get_many("float", float)
        self.assertAlmostEqual(first, 1.1)
        self.assertAlmostEqual(second, 2.2)

    def testAppendingOptions(self):
        parser = ArgumentParser()
        parser.add_option("--int", help="help")
        parser.add_option("--float", help="help")
        parser.add_option("--string", help="help")
        parser.set_appending("int", "--float", "string")

        self.assertFalse(parser.is_parsed("string"))
        with self.assertRaises(ParsingError):
            parser.get("string")
        with self.assertRaises(ParsingError):
            parser.get_many("string")

        parser.parse(["app", "--int", "1", "--int=2", "--float", "8", "--float=2.9", "--string=abc", "--string=def"])
        self.assertEqual(parser.get_many("int", int), [1, 2])
        self.assertEqual(parser.get_many("float", float)[0], 8.0)
        self.assertAlmostEqual(parser.get_many("float", float)[1], 2.9)
        self.assertEqual(parser.get_many("string"), ["abc", "def"])

    def testUnknownNameOnAccess(self):
        parser = ArgumentParser()
        self.assertFalse(parser.is_parsed("nothing"))
        with self.assertRaises(UnknownSwitchError):
            parser.get("nothing")
        with self.assertRaises(UnknownSwitchError):
            parser.get_many("nothing")
        with self.assertRaises(MalformedNameError):
            parser.get("-")

    def testUnsupportedType(self):
        parser = ArgumentParser()
        parser.add_option("--xx", default="1")
        with self.assertRaises(UnsupportedTypeError):
            parser.get("xx", list)


class TestConstraints(TestCase):
    def testEmptyRequiredSet(self):
        parser = ArgumentParser()
        parser.add_flag("-v")
        parser.set_required()
        parser.parse(["apps", "-v"])

    def testMissingRequiredOption(self):
        parser = ArgumentParser()
        parser.add_flag("-v")
        parser.parse(["apps"])
        parser.set_required("v")
        parser.reset()
        with self.assertRaises(MissingRequiredError):
            parser.parse(["apps"])

    def testMissingRequiredOptionsAggregate(self):
        parser = ArgumentParser()
        parser.add_option("--a1")
        parser.add_option("--b1")
        parser.add_flag("-c")
        parser.set_required("a1", "b1", "c")
        with self.assertRaises(MissingRequiredError) as context:
            parser.parse(["app", "-c"])
        self.assertEqual(context.exception.options["missing"], ("--a1", "--b1"))
        self.assertEqual(
            str(context.exception),
            "the following options are required, but were not set: --a1, --b1"
        )

    def testRequiredCheckedBeforePositionals(self):
        parser = ArgumentParser()
        parser.add_flag("-v")
        parser.set_required("v")
        parser.set_allowed_positionals(1)
        parser.set_required_positionals(1)
        with self.assertRaises(MissingRequiredError):
            parser.parse(["app"])

    def testUnknownRequiredName(self):
        with self.assertRaises(UnknownNameError):
            ArgumentParser().set_required("v")

    def testRequiredIsReplacedWholesale(self):
        parser = ArgumentParser()
        parser.add_flag("-a")
        parser.add_flag("-b")
        parser.set_required("a")
        parser.set_required("b")
        self.assertFalse(parser.options[0].required)
        self.assertTrue(parser.options[1].required)

    def testFailedBulkSetterChangesNothing(self):
        parser = ArgumentParser()
        parser.add_flag("-a")
        parser.set_required("a")
        with self.assertRaises(UnknownNameError):
            parser.set_required("b")
        self.assertTrue(parser.options[0].required)

    def testHiddenIsReplacedWholesale(self):
        parser = ArgumentParser()
        parser.add_flag("-a")
        parser.add_flag("-b")
        parser.set_hidden("a", "b")
        parser.set_hidden()
        self.assertFalse(any(option.hidden for option in parser.options))

    def testExclusiveGroups(self):
        parser = ArgumentParser()
        parser.add_flag("-a")
        parser.add_flag("-b")
        parser.add_xor("a", "-b")
        with self.assertRaises(UnknownNameError):
            parser.add_xor("a", "b", "c")
        with self.assertRaises(XorGroupError):
            parser.add_xor("a")
        with self.assertRaises(XorGroupError):
            parser.add_xor()
        with self.assertRaises(XorGroupError):
            parser.add_xor("a", "a")
        self.assertEqual(parser.xors, [("a", "-b")])
        parser.parse(["app", "-a"])
        parser.reset()
        parser.parse(["app", "-b"])
        parser.reset()
        with self.assertRaises(ConflictingOptionsError) as context:
            parser.parse(["app", "-a", "-b"])
        self.assertEqual(str(context.exception), "options '-a' and '-b' must not be used together")

    def testExclusiveGroupReportsFirstTwoInDeclarationOrder(self):
        parser = ArgumentParser()
        for name in ("-x", "-y", "-z"):
            parser.add_flag(name)
        parser.add_xor("z", "y", "x")
        with self.assertRaises(ConflictingOptionsError) as context:
            parser.parse(["app", "-xyz"])
        self.assertEqual(context.exception.options["options"], ("-z", "-y"))

    def testExclusiveGroupCollapsesAliasesOfOneOption(self):
        parser = ArgumentParser()
        parser.add_flag("-a", "--all")
        parser.add_flag("-b")
        for names in (("a", "-a"), ("a", "--all"), ("-a", "all", "a")):
            with self.subTest(names=names):
                with self.assertRaises(XorGroupError):
                    parser.add_xor(*names)
        parser.add_xor("a", "all", "b")
        self.assertEqual(parser.xors, [("a", "b")])
        parser.parse(["app", "-a"])
        self.assertTrue(parser.is_parsed("all"))

    def testSetAppendingAfterParsing(self):
        parser = ArgumentParser()
        parser.add_option("-a")
        parser.set_appending("-a")
        parser.parse(["app", "-a=1", "-a=2"])
        with self.assertRaises(AppendingMismatchError):
            parser.set_appending()
        self.assertTrue(parser.options[0].appending)
        parser.set_appending("a")

    def testSetAppendingUnknownName(self):
        parser = ArgumentParser()
        parser.add_option("-a")
        with self.assertRaises(UnknownNameError):
            parser.set_appending("b")

    def testResetKeepsConfiguration(self):
        parser = ArgumentParser()
        parser.add_option("-a", default="x")
        parser.set_required("a")
        parser.set_allowed_positionals(1)
        parser.parse(["app", "-a", "1", "p"])
        parser.reset()
        self.assertFalse(parser.is_parsed("a"))
        self.assertFalse(parser.has_positionals())
        self.assertEqual(parser.get("a"), "x")
        self.assertTrue(parser.options[0].required)
        self.assertEqual(parser.maximum_positionals, 1)

    def testReparseAfterResetStoresSameValues(self):
        parser = ArgumentParser()
        parser.add_option("--pair", nargs=2)
        parser.add_option("-I")
        parser.set_appending("I")
        parser.set_allowed_positionals(2)
        argv = ["app", "--pair", "a", "b", "-I", "x", "-I=y", "p1", "p2"]
        parser.parse(argv)
        values = [option.values for option in parser.options]
        positionals = parser.positionals
        self.assertEqual(values, [["a", "b"], ["x", "y"]])
        parser.reset()
        parser.parse(argv)
        self.assertEqual([option.values for option in parser.options], values)
        self.assertEqual(parser.positionals, positionals)


if __name__ == "__main__":
    unittest.main()
