from __future__ import annotations

import unittest

from a11yaudit.rules import DETECTORS, FINDING_TYPES, detect_good_patterns, run_detectors
from a11yaudit.rules.accessibility import (
    find_long_animations,
    find_missing_error_indication,
    find_missing_focus_handlers,
    find_missing_image_alt_text,
    find_missing_input_labels,
    find_missing_labels,
    find_missing_live_regions,
    find_missing_reduced_motion,
    find_missing_roles,
    find_missing_selected_state,
    find_small_touch_targets,
)
from a11yaudit.rules.contrast import find_contrast_violations
from a11yaudit.rules.patterns import enclosing_block, opening_tag_pattern, snippet
from a11yaudit.rules.usability import (
    find_missing_back_navigation,
    find_missing_keyboard_avoidance,
    find_missing_loading_state,
)


class PatternHelperTests(unittest.TestCase):
    def test_tag_pattern_handles_nested_braces(self) -> None:
        pattern = opening_tag_pattern("Pressable")
        source = '<Pressable style={{ padding: 4 }} onPress={() => { go(); }} accessibilityLabel="Go">'

        match = pattern.search(source)

        self.assertIsNotNone(match)
        assert match is not None
        self.assertIn("accessibilityLabel", match.group(2))

    def test_tag_pattern_does_not_match_longer_names(self) -> None:
        pattern = opening_tag_pattern("Button")

        self.assertIsNone(pattern.search("<ButtonGroup onPress={go} />"))
        self.assertIsNone(pattern.search("<Button.Icon onPress={go} />"))

    def test_snippet_collapses_whitespace_and_truncates(self) -> None:
        self.assertEqual(snippet("a\n   b"), "a b")
        self.assertEqual(len(snippet("x" * 200)), 83)

    def test_enclosing_block(self) -> None:
        source = "outer { inner { width: 1 } }"
        start, end = enclosing_block(source, source.index("width"))  # type: ignore[misc]

        self.assertEqual(source[start:end], "{ width: 1 }")
        self.assertIsNone(enclosing_block("width: 1", 0))


class TouchTargetTests(unittest.TestCase):
    def test_small_square_yields_one_finding(self) -> None:
        source = "const styles = StyleSheet.create({\n  button: { width: 30, height: 30 },\n});\n"

        findings = find_small_touch_targets(source, "Button.js")

        self.assertEqual(len(findings), 1)
        finding = findings[0]
        self.assertEqual(finding.type, "TOUCH_TARGET_TOO_SMALL")
        self.assertEqual(finding.severity, "HIGH")
        self.assertEqual(finding.line, 2)
        self.assertEqual(finding.wcag_rule, "2.5.5 Target Size")
        self.assertEqual(finding.evidence_snippet, "{ width: 30, height: 30 }")

    def test_minimum_size_passes(self) -> None:
        source = "const styles = { button: { width: 44, height: 44 } };"

        self.assertEqual(find_small_touch_targets(source, "Button.js"), [])

    def test_separate_style_objects_are_reported_separately(self) -> None:
        source = "const styles = {\n  a: { width: 20 },\n  b: { minHeight: 32 },\n};\n"

        findings = find_small_touch_targets(source, "Icons.js")

        self.assertEqual([finding.line for finding in findings], [2, 3])


class LabelAndRoleTests(unittest.TestCase):
    def test_unlabelled_touchable_is_reported(self) -> None:
        source = "<TouchableOpacity onPress={() => go()}>\n  <Text>Go</Text>\n</TouchableOpacity>"

        findings = find_missing_labels(source, "Go.js")

        self.assertEqual(len(findings), 1)
        self.assertEqual(findings[0].severity, "HIGH")
        self.assertEqual(findings[0].wcag_rule, "4.1.2 Name, Role, Value")
        self.assertIn("TouchableOpacity", findings[0].message)

    def test_labelled_touchable_is_clean(self) -> None:
        source = '<TouchableOpacity accessibilityLabel="Go" onPress={go}>'

        self.assertEqual(find_missing_labels(source, "Go.js"), [])

    def test_explicitly_inaccessible_element_is_skipped(self) -> None:
        self.assertEqual(find_missing_labels("<Pressable accessible={false} onPress={go} />", "Go.js"), [])

    def test_missing_role_is_medium(self) -> None:
        findings = find_missing_roles('<Pressable accessibilityLabel="Go" onPress={go} />', "Go.js")

        self.assertEqual(len(findings), 1)
        self.assertEqual(findings[0].type, "MISSING_ACCESSIBILITY_ROLE")
        self.assertEqual(findings[0].severity, "MEDIUM")

    def test_unlabelled_touchable_triggers_label_role_and_focus(self) -> None:
        findings = run_detectors("<TouchableOpacity onPress={f}>", "Go.js")

        self.assertEqual(
            sorted(finding.type for finding in findings),
            ["MISSING_ACCESSIBILITY_LABEL", "MISSING_ACCESSIBILITY_ROLE", "MISSING_FOCUS_HANDLERS"],
        )


class FocusTests(unittest.TestCase):
    def test_focus_handlers_satisfy_check(self) -> None:
        source = '<TextInput placeholder="Email" onFocus={onFocus} />'

        self.assertEqual(find_missing_focus_handlers(source, "Form.js"), [])

    def test_pressable_without_handlers(self) -> None:
        findings = find_missing_focus_handlers("<Pressable onPress={go} />", "Go.js")

        self.assertEqual(len(findings), 1)
        self.assertEqual(findings[0].wcag_rule, "2.1.1 Keyboard")


class MotionTests(unittest.TestCase):
    def test_long_animation(self) -> None:
        source = "Animated.timing(value, {\n  toValue: 1,\n  duration: 6000,\n});"

        findings = find_long_animations(source, "Fade.js")

        self.assertEqual(len(findings), 1)
        self.assertEqual(findings[0].line, 3)
        self.assertEqual(find_long_animations("duration: 300", "Fade.js"), [])

    def test_missing_reduced_motion_points_at_first_animation(self) -> None:
        source = "import React from 'react';\nconst x = new Animated.Value(0);\nAnimated.timing(x, {});"

        findings = find_missing_reduced_motion(source, "Fade.js")

        self.assertEqual(len(findings), 1)
        self.assertEqual(findings[0].line, 2)
        self.assertEqual(findings[0].wcag_rule, "2.3.3 Animation from Interactions")

    def test_reduced_motion_hook_is_a_success(self) -> None:
        source = "const reduce = useReducedMotion();\nAnimated.timing(x, {});"

        self.assertEqual(find_missing_reduced_motion(source, "Fade.js"), [])
        successes = detect_good_patterns(source, "Fade.js")
        self.assertEqual([success.type for success in successes], ["GOOD_REDUCED_MOTION_SUPPORT"])


class ImageAndInputTests(unittest.TestCase):
    def test_image_without_description(self) -> None:
        findings = find_missing_image_alt_text("<Image source={logo} />", "Logo.js")

        self.assertEqual(len(findings), 1)
        self.assertEqual(findings[0].wcag_rule, "1.1.1 Non-text Content")

    def test_decorative_image_is_clean(self) -> None:
        source = '<Image source={divider} accessibilityRole="none" />'

        self.assertEqual(find_missing_image_alt_text(source, "Divider.js"), [])

    def test_input_without_label(self) -> None:
        findings = find_missing_input_labels("<TextInput value={email} />", "Form.js")

        self.assertEqual(len(findings), 1)
        self.assertEqual(findings[0].type, "MISSING_INPUT_LABEL")
        self.assertEqual(find_missing_input_labels('<TextInput placeholder="Email" />', "Form.js"), [])

    def test_error_indication_only_when_errors_are_handled(self) -> None:
        plain = '<TextInput placeholder="Email" />'
        with_errors = "const [error, setError] = useState(null);\n" + plain
        exposed = "const [error, setError] = useState(null);\n" + (
            '<TextInput placeholder="Email" accessibilityInvalid={!!error} />'
        )

        self.assertEqual(find_missing_error_indication(plain, "Form.js"), [])
        self.assertEqual(len(find_missing_error_indication(with_errors, "Form.js")), 1)
        self.assertEqual(find_missing_error_indication(exposed, "Form.js"), [])


class StatusAndStateTests(unittest.TestCase):
    def test_activity_indicator_without_live_region(self) -> None:
        findings = find_missing_live_regions("<ActivityIndicator size=\"large\" />", "Spinner.js")

        self.assertEqual(len(findings), 1)
        self.assertEqual(findings[0].wcag_rule, "4.1.3 Status Messages")

    def test_live_region_satisfies_check(self) -> None:
        source = '<View accessibilityLiveRegion="polite"><ActivityIndicator /></View>'

        self.assertEqual(find_missing_live_regions(source, "Spinner.js"), [])

    def test_selected_state(self) -> None:
        self.assertEqual(len(find_missing_selected_state("<Tab selected={active} />", "Tabs.js")), 1)
        source = "<Tab selected={active} accessibilityState={{ selected: active }} />"
        self.assertEqual(find_missing_selected_state(source, "Tabs.js"), [])


class ContrastRuleTests(unittest.TestCase):
    def test_low_contrast_theme_pair(self) -> None:
        source = "export const colors = {\n  text: '#777777',\n  background: '#ffffff',\n};\n"

        findings = find_contrast_violations(source, "src/theme/colors.js")

        self.assertEqual(len(findings), 1)
        finding = findings[0]
        self.assertEqual(finding.type, "INSUFFICIENT_COLOR_CONTRAST")
        self.assertEqual(finding.severity, "HIGH")
        self.assertEqual(finding.line, 2)
        self.assertIn("#5f5f5f", finding.suggestion)

    def test_non_theme_files_are_ignored(self) -> None:
        source = "const palette = { text: '#777777', background: '#ffffff' };"

        self.assertEqual(find_contrast_violations(source, "Card.js"), [])

    def test_unsupported_color_format_is_skipped(self) -> None:
        source = "export default { text: 'rgb(119, 119, 119)', background: '#ffffff' };"

        findings = find_contrast_violations(source, "theme.js")

        self.assertEqual([finding.type for finding in findings], ["CONTRAST_CHECK_SKIPPED"])


class UsabilityTests(unittest.TestCase):
    def test_keyboard_avoidance(self) -> None:
        source = '<TextInput placeholder="Name" />'

        self.assertEqual(len(find_missing_keyboard_avoidance(source, "Form.js")), 1)
        wrapped = "<KeyboardAvoidingView>" + source + "</KeyboardAvoidingView>"
        self.assertEqual(find_missing_keyboard_avoidance(wrapped, "Form.js"), [])

    def test_loading_state(self) -> None:
        source = "const data = await fetch(url);\nreturn <View />;"

        findings = find_missing_loading_state(source, "List.js")

        self.assertEqual(len(findings), 1)
        self.assertEqual(findings[0].severity, "LOW")
        self.assertIsNone(findings[0].wcag_rule)
        self.assertEqual(find_missing_loading_state("const [loading] = useState(true);\n" + source, "List.js"), [])

    def test_back_navigation_for_screens(self) -> None:
        findings = find_missing_back_navigation("export default function ProfileScreen() {}", "src/ProfileScreen.js")

        self.assertEqual(len(findings), 1)
        self.assertIsNone(findings[0].line)
        self.assertEqual(find_missing_back_navigation("", "src/HomeScreen.js"), [])
        self.assertEqual(find_missing_back_navigation("navigation.goBack()", "src/ProfileScreen.js"), [])
        self.assertEqual(find_missing_back_navigation("", "src/Profile.js"), [])


class RegistryTests(unittest.TestCase):
    def test_registry_covers_every_finding_type(self) -> None:
        self.assertEqual(len(DETECTORS), len(FINDING_TYPES))

    def test_detectors_are_deterministic(self) -> None:
        source = "<TouchableOpacity onPress={f}>\n<Image source={a} />\nconst s = { icon: { width: 20 } };"

        self.assertEqual(run_detectors(source, "X.js"), run_detectors(source, "X.js"))

    def test_good_accessibility_pattern(self) -> None:
        source = '<Pressable accessibilityLabel="Go" accessibilityRole="button" onFocus={f} onPress={go} />'

        self.assertEqual(run_detectors(source, "Go.js"), [])
        successes = detect_good_patterns(source, "Go.js")
        self.assertEqual([success.type for success in successes], ["GOOD_ACCESSIBILITY_IMPLEMENTATION"])


if __name__ == "__main__":
    unittest.main()
