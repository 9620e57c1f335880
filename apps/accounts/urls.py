from django.urls import path
from . import views

app_name = 'users'

urlpatterns = [
    # Authentication
    path('register/student/', views.register_student, name='register-student'),
    path('register/business/', views.register_business, name='register-business'),
    path('login/', views.login, name='login'),
    path('logout/', views.logout, name='logout'),

    # User profile
    path('user/', views.get_current_user, name='current-user'),
    path('user/update/', views.update_profile, name='update-profile'),
    path('user/password/', views.change_password, name='change-password'),
    path('users/<uuid:pk>/', views.UserDetailView.as_view(), name='user-detail'),
]
