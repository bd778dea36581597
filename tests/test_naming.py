from rosterql.core.naming import camelize_keys, from_camel, to_camel


def test_round_names():
    assert from_camel('appLanguageCode') == 'app_language_code'
    assert from_camel('registeredEvents') == 'registered_events'
    assert to_camel('curr_page_no') == 'currPageNo'
    assert to_camel('') == ''


def test_camelize_keys_walks_nested_structures():
    value = {'first_name': 'Jo', 'registered_events': [{'event_id': 1}], 'tags': ('a_b',)}
    assert camelize_keys(value) == {
        'firstName': 'Jo',
        'registeredEvents': [{'eventId': 1}],
        'tags': ['a_b'],
    }
