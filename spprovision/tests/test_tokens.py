import unittest

from spprovision.tokens import ProvisionedList, TokenReplacer

tc = unittest.TestCase()


def _replacer(*lists: ProvisionedList) -> TokenReplacer:
    replacer = TokenReplacer()
    for lst in lists:
        replacer.remember(lst)
    return replacer


def test_listid_token_is_replaced_with_list_id() -> None:
    replacer = _replacer(ProvisionedList(title="Projects", id="1111-aaaa"))

    xml = '<Field Type="Lookup" List="{listid:Projects}" ShowField="Title" />'

    tc.assertEqual(
        replacer.replace(xml),
        '<Field Type="Lookup" List="1111-aaaa" ShowField="Title" />',
    )


def test_titles_with_spaces_and_nordic_letters() -> None:
    replacer = _replacer(
        ProvisionedList(title="Kunde Møter", id="id-1"),
        ProvisionedList(title="Årsplan 2024", id="id-2"),
    )

    result = replacer.replace("{listid:Kunde Møter}|{listid:Årsplan 2024}")

    tc.assertEqual(result, "id-1|id-2")


def test_unknown_list_leaves_token_untouched() -> None:
    replacer = _replacer(ProvisionedList(title="Projects", id="1111"))

    tc.assertEqual(replacer.replace("{listid:Tasks}"), "{listid:Tasks}")


def test_ambiguous_title_leaves_token_untouched() -> None:
    replacer = _replacer(
        ProvisionedList(title="Projects", id="1"),
        ProvisionedList(title="Projects", id="2"),
    )

    tc.assertEqual(replacer.replace("{listid:Projects}"), "{listid:Projects}")


def test_unknown_token_type_is_ignored() -> None:
    replacer = _replacer(ProvisionedList(title="Projects", id="1"))

    tc.assertEqual(replacer.replace("{webid:Projects}"), "{webid:Projects}")


def test_every_occurrence_is_replaced() -> None:
    replacer = _replacer(
        ProvisionedList(title="A", id="id-a"),
        ProvisionedList(title="B", id="id-b"),
    )

    result = replacer.replace("{listid:A} {listid:B} {listid:A}")

    tc.assertEqual(result, "id-a id-b id-a")


def test_cache_is_append_only() -> None:
    replacer = TokenReplacer()
    replacer.remember(ProvisionedList(title="A", id="1"))
    replacer.remember(ProvisionedList(title="B", id="2"))

    tc.assertEqual([lst.title for lst in replacer.lists], ["A", "B"])
