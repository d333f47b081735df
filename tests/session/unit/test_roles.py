from gamehub.session.roles import drawer_id, is_local_drawer, is_local_host


def test_drawer_id_accepts_both_field_names() -> None:
    assert drawer_id({"drawerId": "p1"}) == "p1"
    assert drawer_id({"isDrawer": "p2"}) == "p2"
    assert drawer_id({"isDrawer": ""}) is None
    assert drawer_id(None) is None


def test_roles_compare_against_current_identity() -> None:
    state = {
        "localPlayerId": "p1",
        "room": {"id": "R", "hostId": "p1", "gameType": "scribble", "isDrawer": "p1"},
    }
    assert is_local_host(state) is True
    assert is_local_drawer(state) is True

    state["localPlayerId"] = "p9"
    assert is_local_host(state) is False
    assert is_local_drawer(state) is False


def test_drawer_role_only_exists_in_scribble() -> None:
    state = {"localPlayerId": "p1", "room": {"id": "R", "hostId": "p1", "gameType": "hangman", "isDrawer": "p1"}}

    assert is_local_drawer(state) is False


def test_no_room_means_no_roles() -> None:
    state = {"localPlayerId": "p1", "room": None}

    assert is_local_host(state) is False
    assert is_local_drawer(state) is False
