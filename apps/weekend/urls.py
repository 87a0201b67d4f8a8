from django.urls import path
from . import views

app_name = 'weekend'

urlpatterns = [
    # GET    /api/data/          - Whole weekend document
    path('data/', views.WeekendDataView.as_view(), name='data'),

    # POST   /api/participants/  - Join (or log in by email)
    # DELETE /api/participants/  - Leave, cascading to own records
    path('participants/', views.ParticipantView.as_view(), name='participants'),

    # POST   /api/wishes/        - Add wish
    # DELETE /api/wishes/        - Remove wish
    path('wishes/', views.WishView.as_view(), name='wishes'),

    # POST   /api/activities/    - Propose activity
    # PUT    /api/activities/    - Toggle vote
    # DELETE /api/activities/    - Remove activity
    path('activities/', views.ActivityView.as_view(), name='activities'),

    # POST   /api/packlist/      - Add item
    # PUT    /api/packlist/      - Assign / check item
    # DELETE /api/packlist/      - Remove item
    path('packlist/', views.PackListView.as_view(), name='packlist'),

    # POST   /api/expenses/      - Log expense
    # DELETE /api/expenses/      - Remove expense
    path('expenses/', views.ExpenseView.as_view(), name='expenses'),

    # GET    /api/settlements/   - Balances and suggested transfers
    path('settlements/', views.SettlementView.as_view(), name='settlements'),

    # POST   /api/schedule/      - Add programme entry
    # DELETE /api/schedule/      - Remove programme entry
    path('schedule/', views.ScheduleView.as_view(), name='schedule'),
]
