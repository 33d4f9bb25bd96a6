# coachhub_backend/models/__init__.py
# Centralized imports for all database models and schemas

# Users and login sessions
from .user_model import User, AuthSession, UserRegister, UserLogin, UserRead

# Club and memberships
from .club_model import Club, Membership, ClubRole, ClubCreate, ClubUpdate, MembershipInvite

# Team
from .team_model import Team, TeamMembership, TeamRole, TeamCreate, TeamUpdate, TeamMembershipCreate

# Seasons and competitions
from .season_model import Season, Competition, CompetitionType, SeasonCreate, CompetitionCreate

# Players
from .player_model import (
    Player, PositionGroup, DominantSide, PlayerCreate, PlayerUpdate,
    QuickAddPlayer, ReorderRequest
)

# Fixtures and lineup sheets
from .fixture_model import (
    Fixture, FixtureStatus, FixtureCreate, FixtureUpdate,
    Lineup, LineupCreate, LineupUpdate
)

# Match squads
from .squad_model import (
    MatchSquad, TeamSide, SlotType, LineupSlot, SubEvent, SquadUpsert, SquadUpdate,
    SlotAssignRequest, JerseyUpdateRequest, SubstitutionRequest
)

# Live match state and events
from .match_state_model import (
    MatchState, MatchStatus, Half, MatchStateUpdate, MatchStateRead,
    MatchEvent, EventCategory, MatchEventCreate, MatchEventBatch, MatchEventUpdate
)

# Training
from .training_model import (
    TrainingSession, TrainingAttendance, AttendanceStatus,
    TrainingSessionCreate, TrainingSessionUpdate, AttendanceRecord, AttendanceBatch
)

# Development notes
from .development_note_model import DevelopmentNote, DevelopmentNoteCreate, DevelopmentNoteUpdate

# Availability
from .availability_model import Availability, AvailabilityStatus, AvailabilityCreate, AvailabilityUpdate

# Fitness tests
from .fitness_test_model import FitnessTest, FitnessTestCreate
